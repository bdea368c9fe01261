"""Order repository"""

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.order import Order, OrderItem
from app.repositories.base import scoped_select, add_scoped


async def list_orders(db: AsyncSession, status: Optional[str] = None) -> List[Order]:
    query = scoped_select(db, Order).options(selectinload(Order.items))
    if status:
        query = query.where(Order.status == status)
    result = await db.execute(query.order_by(Order.created_at.desc(), Order.id.desc()))
    return list(result.scalars().all())


async def get_order(db: AsyncSession, order_id: int) -> Optional[Order]:
    result = await db.execute(
        scoped_select(db, Order)
        .where(Order.id == order_id)
        .options(selectinload(Order.items))
    )
    return result.scalar_one_or_none()


async def create_order(db: AsyncSession, order: Order, items: List[OrderItem]) -> Order:
    """Insert an order with its lines, all under the bound restaurant"""
    add_scoped(db, order)
    for item in items:
        add_scoped(db, item)
        order.items.append(item)
    await db.flush()
    return await get_order(db, order.id)


async def delete_order(db: AsyncSession, order: Order) -> None:
    await db.delete(order)
    await db.flush()
