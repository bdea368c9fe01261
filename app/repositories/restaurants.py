"""Restaurant registry.

``restaurants`` is the tenant registry itself and carries no row-level
security; who may read it is decided by the routes.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.restaurant import Restaurant, RestaurantStatus, PLATFORM_ORGANIZATION_ID


async def get_restaurant(
    db: AsyncSession,
    restaurant_id: int,
    for_update: bool = False,
) -> Optional[Restaurant]:
    query = select(Restaurant).where(Restaurant.id == restaurant_id)
    if for_update:
        query = query.with_for_update()
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def get_restaurant_by_email(db: AsyncSession, email: str) -> Optional[Restaurant]:
    result = await db.execute(select(Restaurant).where(Restaurant.email == email))
    return result.scalar_one_or_none()


async def list_restaurants(
    db: AsyncSession,
    status: Optional[RestaurantStatus] = None,
    kam_id: Optional[int] = None,
) -> List[Restaurant]:
    """Registered restaurants; the platform organization is never listed"""
    query = select(Restaurant).where(Restaurant.id != PLATFORM_ORGANIZATION_ID)
    if status is not None:
        query = query.where(Restaurant.status == status)
    if kam_id is not None:
        query = query.where(Restaurant.kam_id == kam_id)
    result = await db.execute(query.order_by(Restaurant.created_at.desc(), Restaurant.id.desc()))
    return list(result.scalars().all())


async def create_restaurant(db: AsyncSession, restaurant: Restaurant) -> Restaurant:
    db.add(restaurant)
    await db.flush()
    await db.refresh(restaurant)
    return restaurant
