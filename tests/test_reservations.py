"""Tests for reservation booking rules"""

from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest
from httpx import AsyncClient
from sqlalchemy.dialects import postgresql

from app.exceptions import ValidationError
from app.models.user import UserRole
from app.repositories.reservations import lock_table, table_lock_statement
from app.services.reservations import to_utc_naive, validate_window
from app.tenancy.binder import TENANT_INFO_KEY
from app.tenancy.context import TenantContext
from tests.conftest import auth_headers


def _window(hours_ahead: float, length: float = 2.0):
    start = datetime.utcnow().replace(microsecond=0) + timedelta(hours=hours_ahead)
    return start, start + timedelta(hours=length)


def _payload(start: datetime, end: datetime, table: str = "T1") -> dict:
    return {
        "table_number": table,
        "start_time": start.isoformat(),
        "end_time": end.isoformat(),
        "number_of_guests": 4,
        "customer_name": "Rossi",
    }


def test_validate_window_rejects_reversed():
    start, end = _window(24)

    with pytest.raises(ValidationError):
        validate_window(end, start)


def test_validate_window_rejects_past():
    start, end = _window(-3)

    with pytest.raises(ValidationError):
        validate_window(start, end)


def test_to_utc_naive_converts_aware_times():
    from datetime import timezone

    aware = datetime(2030, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))

    assert to_utc_naive(aware) == datetime(2030, 1, 1, 10, 0)


async def test_create_reservation(client: AsyncClient, staff_a):
    start, end = _window(24)

    response = await client.post("/reservations", json=_payload(start, end), headers=auth_headers(staff_a))

    assert response.status_code == 201
    body = response.json()
    assert body["user_id"] == staff_a.id
    assert body["status"] == "pending"


async def test_overlapping_reservation_conflicts(client: AsyncClient, staff_a):
    headers = auth_headers(staff_a)
    start, end = _window(24)
    await client.post("/reservations", json=_payload(start, end), headers=headers)

    overlap = await client.post(
        "/reservations",
        json=_payload(start + timedelta(hours=1), end + timedelta(hours=1)),
        headers=headers,
    )
    back_to_back = await client.post(
        "/reservations",
        json=_payload(end, end + timedelta(hours=2)),
        headers=headers,
    )
    other_table = await client.post("/reservations", json=_payload(start, end, table="T2"), headers=headers)

    assert overlap.status_code == 409
    assert back_to_back.status_code == 201
    assert other_table.status_code == 201


async def test_cancelled_reservation_frees_the_table(client: AsyncClient, staff_a):
    headers = auth_headers(staff_a)
    start, end = _window(24)
    first = await client.post("/reservations", json=_payload(start, end), headers=headers)

    cancel = await client.put(
        f"/reservations/{first.json()['id']}",
        json={"status": "cancelled"},
        headers=headers,
    )
    rebook = await client.post("/reservations", json=_payload(start, end), headers=headers)

    assert cancel.status_code == 200
    assert cancel.json()["status"] == "cancelled"
    assert rebook.status_code == 201


async def test_reservation_in_the_past_rejected(client: AsyncClient, staff_a):
    start, end = _window(-5)

    response = await client.post("/reservations", json=_payload(start, end), headers=auth_headers(staff_a))

    assert response.status_code == 400


async def test_end_before_start_rejected(client: AsyncClient, staff_a):
    start, end = _window(24)

    response = await client.post("/reservations", json=_payload(end, start), headers=auth_headers(staff_a))

    assert response.status_code == 400


async def test_moving_onto_a_held_table_conflicts(client: AsyncClient, staff_a):
    headers = auth_headers(staff_a)
    start, end = _window(24)
    await client.post("/reservations", json=_payload(start, end, table="T1"), headers=headers)
    second = await client.post("/reservations", json=_payload(start, end, table="T2"), headers=headers)

    response = await client.put(
        f"/reservations/{second.json()['id']}",
        json={"table_number": "T1"},
        headers=headers,
    )

    assert response.status_code == 409


async def test_bookings_of_other_restaurants_do_not_block(client: AsyncClient, staff_a, admin_b):
    start, end = _window(24)
    await client.post("/reservations", json=_payload(start, end), headers=auth_headers(admin_b))

    response = await client.post("/reservations", json=_payload(start, end), headers=auth_headers(staff_a))

    assert response.status_code == 201


async def test_list_filters_by_status(client: AsyncClient, staff_a):
    headers = auth_headers(staff_a)
    start, end = _window(24)
    first = await client.post("/reservations", json=_payload(start, end, table="T1"), headers=headers)
    await client.post("/reservations", json=_payload(start, end, table="T2"), headers=headers)
    await client.put(f"/reservations/{first.json()['id']}", json={"status": "confirmed"}, headers=headers)

    response = await client.get("/reservations", params={"status": "confirmed"}, headers=headers)

    assert [r["id"] for r in response.json()] == [first.json()["id"]]


class RecordingSession:
    """Async session stand-in that records executed statements"""

    def __init__(self, dialect: str, ctx: TenantContext):
        self.info = {TENANT_INFO_KEY: ctx}
        self.dialect = dialect
        self.executed = []

    async def connection(self):
        return SimpleNamespace(dialect=SimpleNamespace(name=self.dialect))

    async def execute(self, statement):
        self.executed.append(statement)


CTX = TenantContext(user_id=1, restaurant_id=2, role=UserRole.STAFF)


def test_table_lock_is_transaction_scoped_per_table():
    sql = str(table_lock_statement(2, "T1").compile(dialect=postgresql.dialect()))

    assert "pg_advisory_xact_lock" in sql
    assert "hashtext" in sql


async def test_table_lock_taken_on_postgresql():
    session = RecordingSession("postgresql", CTX)

    await lock_table(session, "T1")

    assert len(session.executed) == 1
    params = session.executed[0].compile(dialect=postgresql.dialect()).params
    assert sorted(map(str, params.values())) == ["2", "T1"]


async def test_table_lock_skipped_elsewhere():
    session = RecordingSession("sqlite", CTX)

    await lock_table(session, "T1")

    assert session.executed == []
