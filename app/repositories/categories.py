"""Menu category repository"""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.menu import MenuCategory, MenuItem
from app.repositories.base import scoped_select, add_scoped


async def list_categories(db: AsyncSession, active_only: bool = False) -> List[MenuCategory]:
    query = scoped_select(db, MenuCategory)
    if active_only:
        query = query.where(MenuCategory.is_active.is_(True))
    result = await db.execute(query.order_by(MenuCategory.display_order, MenuCategory.name))
    return list(result.scalars().all())


async def get_category(db: AsyncSession, category_id: int) -> Optional[MenuCategory]:
    result = await db.execute(scoped_select(db, MenuCategory).where(MenuCategory.id == category_id))
    return result.scalar_one_or_none()


async def get_category_by_name(db: AsyncSession, name: str) -> Optional[MenuCategory]:
    result = await db.execute(scoped_select(db, MenuCategory).where(MenuCategory.name == name))
    return result.scalar_one_or_none()


async def create_category(db: AsyncSession, category: MenuCategory) -> MenuCategory:
    add_scoped(db, category)
    await db.flush()
    await db.refresh(category)
    return category


async def count_items(db: AsyncSession, category: MenuCategory) -> int:
    result = await db.execute(
        select(func.count(MenuItem.id)).where(
            MenuItem.category_id == category.id,
            MenuItem.restaurant_id == category.restaurant_id,
        )
    )
    return result.scalar_one()


async def delete_category(db: AsyncSession, category: MenuCategory) -> None:
    await db.delete(category)
    await db.flush()
