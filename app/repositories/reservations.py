"""Reservation repository"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.reservation import Reservation, ReservationStatus
from app.repositories.base import scoped_select, add_scoped
from app.tenancy.binder import require_bound_context


async def list_reservations(
    db: AsyncSession,
    status: Optional[str] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List[Reservation]:
    query = scoped_select(db, Reservation)
    if status:
        query = query.where(Reservation.status == status)
    if start:
        query = query.where(Reservation.start_time >= start)
    if end:
        query = query.where(Reservation.start_time < end)
    result = await db.execute(query.order_by(Reservation.start_time))
    return list(result.scalars().all())


async def get_reservation(db: AsyncSession, reservation_id: int) -> Optional[Reservation]:
    result = await db.execute(scoped_select(db, Reservation).where(Reservation.id == reservation_id))
    return result.scalar_one_or_none()


def table_lock_statement(restaurant_id: int, table_number: str):
    return select(func.pg_advisory_xact_lock(restaurant_id, func.hashtext(table_number)))


async def lock_table(db: AsyncSession, table_number: str) -> None:
    """Serialize bookings of one table until the transaction ends.

    Taken before the overlap check so two concurrent bookings cannot both
    see the table free. PostgreSQL only.
    """
    connection = await db.connection()
    if connection.dialect.name != "postgresql":
        return
    ctx = require_bound_context(db)
    await db.execute(table_lock_statement(ctx.restaurant_id, table_number))


async def has_overlap(
    db: AsyncSession,
    table_number: str,
    start_time: datetime,
    end_time: datetime,
    exclude_id: Optional[int] = None,
) -> bool:
    """Whether a non-cancelled booking holds ``table_number`` within the window"""
    query = scoped_select(db, Reservation).where(
        Reservation.table_number == table_number,
        Reservation.status != ReservationStatus.CANCELLED.value,
        Reservation.start_time < end_time,
        Reservation.end_time > start_time,
    )
    if exclude_id is not None:
        query = query.where(Reservation.id != exclude_id)
    result = await db.execute(query.limit(1))
    return result.scalar_one_or_none() is not None


async def create_reservation(db: AsyncSession, reservation: Reservation) -> Reservation:
    add_scoped(db, reservation)
    await db.flush()
    await db.refresh(reservation)
    return reservation


async def delete_reservation(db: AsyncSession, reservation: Reservation) -> None:
    await db.delete(reservation)
    await db.flush()
