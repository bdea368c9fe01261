"""Menu item repository"""

from typing import Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.menu import MenuItem
from app.repositories.base import scoped_select, add_scoped


async def list_menu_items(
    db: AsyncSession,
    category_id: Optional[int] = None,
    available_only: bool = False,
) -> List[MenuItem]:
    query = scoped_select(db, MenuItem)
    if category_id is not None:
        query = query.where(MenuItem.category_id == category_id)
    if available_only:
        query = query.where(MenuItem.is_available.is_(True))
    result = await db.execute(query.order_by(MenuItem.display_order, MenuItem.name))
    return list(result.scalars().all())


async def get_menu_item(db: AsyncSession, item_id: int) -> Optional[MenuItem]:
    result = await db.execute(scoped_select(db, MenuItem).where(MenuItem.id == item_id))
    return result.scalar_one_or_none()


async def get_menu_items_by_ids(db: AsyncSession, item_ids: Iterable[int]) -> dict:
    """Menu items of the bound restaurant keyed by id; foreign ids are absent"""
    ids = set(item_ids)
    if not ids:
        return {}
    result = await db.execute(scoped_select(db, MenuItem).where(MenuItem.id.in_(ids)))
    return {item.id: item for item in result.scalars().all()}


async def create_menu_item(db: AsyncSession, item: MenuItem) -> MenuItem:
    add_scoped(db, item)
    await db.flush()
    await db.refresh(item)
    return item


async def delete_menu_item(db: AsyncSession, item: MenuItem) -> None:
    await db.delete(item)
    await db.flush()
