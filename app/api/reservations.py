"""Reservation API endpoints"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.auth import get_tenant_context, get_tenant_db, require_roles
from app.exceptions import NotFoundError
from app.models.reservation import Reservation, ReservationStatus
from app.models.user import UserRole
from app.repositories import reservations as reservations_repo
from app.schemas.reservation import ReservationCreate, ReservationUpdate, ReservationResponse
from app.services import reservations as reservation_service
from app.tenancy.context import TenantContext

router = APIRouter()


async def _get_or_404(db: AsyncSession, reservation_id: int) -> Reservation:
    reservation = await reservations_repo.get_reservation(db, reservation_id)
    if reservation is None:
        raise NotFoundError("Reservation not found")
    return reservation


@router.get("", response_model=List[ReservationResponse])
async def list_reservations(
    status: Optional[ReservationStatus] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    db: AsyncSession = Depends(get_tenant_db),
):
    """List reservations, optionally filtered by status and start time window"""
    return await reservations_repo.list_reservations(
        db,
        status=status.value if status else None,
        start=reservation_service.to_utc_naive(start) if start else None,
        end=reservation_service.to_utc_naive(end) if end else None,
    )


@router.post("", response_model=ReservationResponse, status_code=201)
async def create_reservation(
    data: ReservationCreate,
    ctx: TenantContext = Depends(get_tenant_context),
    db: AsyncSession = Depends(get_tenant_db),
):
    """Book a table; the table must be free for the whole window"""
    reservation = await reservation_service.create_reservation(
        db,
        user_id=ctx.user_id,
        **data.model_dump(),
    )
    await db.commit()
    return reservation


@router.get("/{reservation_id}", response_model=ReservationResponse)
async def get_reservation(
    reservation_id: int,
    db: AsyncSession = Depends(get_tenant_db),
):
    return await _get_or_404(db, reservation_id)


@router.put("/{reservation_id}", response_model=ReservationResponse)
async def update_reservation(
    reservation_id: int,
    data: ReservationUpdate,
    db: AsyncSession = Depends(get_tenant_db),
):
    reservation = await _get_or_404(db, reservation_id)
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    reservation = await reservation_service.update_reservation(db, reservation, changes)
    await db.commit()
    await db.refresh(reservation)
    return reservation


@router.delete(
    "/{reservation_id}",
    status_code=204,
    dependencies=[Depends(require_roles(UserRole.ADMIN, UserRole.STAFF))],
)
async def delete_reservation(
    reservation_id: int,
    db: AsyncSession = Depends(get_tenant_db),
):
    reservation = await _get_or_404(db, reservation_id)
    await reservations_repo.delete_reservation(db, reservation)
    await db.commit()
