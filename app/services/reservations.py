"""Reservation booking rules"""

from datetime import datetime, timezone
from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ConflictError, ValidationError
from app.models.reservation import Reservation, ReservationStatus
from app.repositories import reservations as reservations_repo
from app.tenancy.binder import require_bound_context

logger = structlog.get_logger()


def to_utc_naive(value: datetime) -> datetime:
    """Stored times are naive UTC"""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def validate_window(start_time: datetime, end_time: datetime, now: Optional[datetime] = None) -> None:
    if end_time <= start_time:
        raise ValidationError("End time must be after start time")
    if start_time < (now or datetime.utcnow()):
        raise ValidationError("Reservation cannot be in the past")


async def create_reservation(
    db: AsyncSession,
    table_number: str,
    start_time: datetime,
    end_time: datetime,
    number_of_guests: int,
    user_id: Optional[int] = None,
    customer_name: Optional[str] = None,
    customer_email: Optional[str] = None,
    customer_phone: Optional[str] = None,
    notes: Optional[str] = None,
) -> Reservation:
    """Book a table in the bound restaurant.

    Raises:
        ValidationError: window is empty, reversed or in the past
        ConflictError: the table is already held in that window
    """
    start_time = to_utc_naive(start_time)
    end_time = to_utc_naive(end_time)
    validate_window(start_time, end_time)

    await reservations_repo.lock_table(db, table_number)
    if await reservations_repo.has_overlap(db, table_number, start_time, end_time):
        raise ConflictError("Table is not available at the requested time")

    reservation = await reservations_repo.create_reservation(
        db,
        Reservation(
            user_id=user_id,
            customer_name=customer_name,
            customer_email=customer_email,
            customer_phone=customer_phone,
            table_number=table_number,
            start_time=start_time,
            end_time=end_time,
            number_of_guests=number_of_guests,
            status=ReservationStatus.PENDING.value,
            notes=notes,
        ),
    )
    logger.info(
        "Reservation created",
        restaurant_id=require_bound_context(db).restaurant_id,
        reservation_id=reservation.id,
        table_number=table_number,
    )
    return reservation


async def update_reservation(db: AsyncSession, reservation: Reservation, changes: dict) -> Reservation:
    """Apply ``changes`` after re-validating the window and table availability"""
    start_time = to_utc_naive(changes.get("start_time") or reservation.start_time)
    end_time = to_utc_naive(changes.get("end_time") or reservation.end_time)
    table_number = changes.get("table_number") or reservation.table_number
    status = ReservationStatus(changes.get("status") or reservation.status)

    if end_time <= start_time:
        raise ValidationError("End time must be after start time")
    if start_time != reservation.start_time or end_time != reservation.end_time:
        validate_window(start_time, end_time)

    if status != ReservationStatus.CANCELLED:
        await reservations_repo.lock_table(db, table_number)
        if await reservations_repo.has_overlap(db, table_number, start_time, end_time, exclude_id=reservation.id):
            raise ConflictError("Table is not available at the requested time")

    for field, value in changes.items():
        if field in ("start_time", "end_time"):
            value = to_utc_naive(value)
        elif field == "status":
            value = ReservationStatus(value).value
        setattr(reservation, field, value)
    await db.flush()
    return reservation
