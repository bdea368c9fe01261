"""Menu item API endpoints"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.auth import get_tenant_db, require_roles
from app.exceptions import NotFoundError
from app.models.menu import MenuItem
from app.models.user import UserRole
from app.repositories import categories as categories_repo
from app.repositories import menu_items as menu_items_repo
from app.repositories.base import apply_changes
from app.schemas.menu import MenuItemCreate, MenuItemUpdate, MenuItemResponse

router = APIRouter()

menu_editor = require_roles(UserRole.ADMIN, UserRole.STAFF)


async def _get_or_404(db: AsyncSession, item_id: int) -> MenuItem:
    item = await menu_items_repo.get_menu_item(db, item_id)
    if item is None:
        raise NotFoundError("Menu item not found")
    return item


async def _require_category(db: AsyncSession, category_id: int) -> None:
    # A category of another restaurant is reported exactly like a missing one
    if await categories_repo.get_category(db, category_id) is None:
        raise NotFoundError("Category not found")


@router.get("", response_model=List[MenuItemResponse])
async def list_menu_items(
    category_id: Optional[int] = None,
    available_only: bool = False,
    db: AsyncSession = Depends(get_tenant_db),
):
    """List menu items of the caller's restaurant"""
    return await menu_items_repo.list_menu_items(db, category_id=category_id, available_only=available_only)


@router.post("", response_model=MenuItemResponse, status_code=201, dependencies=[Depends(menu_editor)])
async def create_menu_item(
    data: MenuItemCreate,
    db: AsyncSession = Depends(get_tenant_db),
):
    await _require_category(db, data.category_id)
    item = await menu_items_repo.create_menu_item(db, MenuItem(**data.model_dump()))
    await db.commit()
    return item


@router.get("/{item_id}", response_model=MenuItemResponse)
async def get_menu_item(
    item_id: int,
    db: AsyncSession = Depends(get_tenant_db),
):
    return await _get_or_404(db, item_id)


@router.put("/{item_id}", response_model=MenuItemResponse, dependencies=[Depends(menu_editor)])
async def update_menu_item(
    item_id: int,
    data: MenuItemUpdate,
    db: AsyncSession = Depends(get_tenant_db),
):
    item = await _get_or_404(db, item_id)
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    if "category_id" in changes:
        await _require_category(db, changes["category_id"])

    apply_changes(item, changes)
    await db.commit()
    await db.refresh(item)
    return item


@router.delete("/{item_id}", status_code=204, dependencies=[Depends(menu_editor)])
async def delete_menu_item(
    item_id: int,
    db: AsyncSession = Depends(get_tenant_db),
):
    item = await _get_or_404(db, item_id)
    await menu_items_repo.delete_menu_item(db, item)
    await db.commit()
