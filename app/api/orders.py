"""Order API endpoints"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.auth import get_tenant_context, get_tenant_db, require_roles
from app.exceptions import NotFoundError
from app.models.order import Order, OrderStatus
from app.models.user import UserRole
from app.repositories import orders as orders_repo
from app.repositories.base import apply_changes
from app.schemas.order import OrderCreate, OrderUpdate, OrderStatusUpdate, OrderResponse
from app.services import orders as order_service
from app.tenancy.context import TenantContext

router = APIRouter()

order_staff = require_roles(UserRole.ADMIN, UserRole.STAFF)


async def _get_or_404(db: AsyncSession, order_id: int) -> Order:
    order = await orders_repo.get_order(db, order_id)
    if order is None:
        raise NotFoundError("Order not found")
    return order


@router.get("", response_model=List[OrderResponse])
async def list_orders(
    status: Optional[OrderStatus] = None,
    db: AsyncSession = Depends(get_tenant_db),
):
    """List orders of the caller's restaurant, newest first"""
    return await orders_repo.list_orders(db, status=status.value if status else None)


@router.post("", response_model=OrderResponse, status_code=201)
async def create_order(
    data: OrderCreate,
    ctx: TenantContext = Depends(get_tenant_context),
    db: AsyncSession = Depends(get_tenant_db),
):
    """Place an order; prices come from the menu and the total is computed"""
    order = await order_service.place_order(
        db,
        lines=[line.model_dump() for line in data.items],
        user_id=ctx.user_id,
        customer_name=data.customer_name,
        customer_phone=data.customer_phone,
        notes=data.notes,
    )
    await db.commit()
    return order


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: int,
    db: AsyncSession = Depends(get_tenant_db),
):
    return await _get_or_404(db, order_id)


@router.put("/{order_id}", response_model=OrderResponse, dependencies=[Depends(order_staff)])
async def update_order(
    order_id: int,
    data: OrderUpdate,
    db: AsyncSession = Depends(get_tenant_db),
):
    order = await _get_or_404(db, order_id)
    apply_changes(order, data.model_dump(exclude_unset=True))
    await db.commit()
    return await _get_or_404(db, order_id)


@router.put("/{order_id}/status", response_model=OrderResponse, dependencies=[Depends(order_staff)])
async def update_order_status(
    order_id: int,
    data: OrderStatusUpdate,
    db: AsyncSession = Depends(get_tenant_db),
):
    await order_service.update_order_status(db, order_id, data.status)
    await db.commit()
    return await _get_or_404(db, order_id)


@router.delete("/{order_id}", status_code=204, dependencies=[Depends(require_roles(UserRole.ADMIN))])
async def delete_order(
    order_id: int,
    db: AsyncSession = Depends(get_tenant_db),
):
    order = await _get_or_404(db, order_id)
    await orders_repo.delete_order(db, order)
    await db.commit()
