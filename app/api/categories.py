"""Menu category API endpoints"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.auth import get_tenant_db, require_roles
from app.exceptions import ConflictError, NotFoundError
from app.models.menu import MenuCategory
from app.models.user import UserRole
from app.repositories import categories as categories_repo
from app.repositories.base import apply_changes
from app.schemas.menu import CategoryCreate, CategoryUpdate, CategoryResponse

router = APIRouter()

menu_editor = require_roles(UserRole.ADMIN, UserRole.STAFF)


async def _get_or_404(db: AsyncSession, category_id: int) -> MenuCategory:
    category = await categories_repo.get_category(db, category_id)
    if category is None:
        raise NotFoundError("Category not found")
    return category


@router.get("", response_model=List[CategoryResponse])
async def list_categories(
    active_only: bool = False,
    db: AsyncSession = Depends(get_tenant_db),
):
    """List menu categories of the caller's restaurant"""
    return await categories_repo.list_categories(db, active_only=active_only)


@router.post("", response_model=CategoryResponse, status_code=201, dependencies=[Depends(menu_editor)])
async def create_category(
    data: CategoryCreate,
    db: AsyncSession = Depends(get_tenant_db),
):
    """Create a menu category; names are unique per restaurant"""
    if await categories_repo.get_category_by_name(db, data.name):
        raise ConflictError("Category with this name already exists")

    category = await categories_repo.create_category(db, MenuCategory(**data.model_dump()))
    await db.commit()
    return category


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: int,
    db: AsyncSession = Depends(get_tenant_db),
):
    return await _get_or_404(db, category_id)


@router.put("/{category_id}", response_model=CategoryResponse, dependencies=[Depends(menu_editor)])
async def update_category(
    category_id: int,
    data: CategoryUpdate,
    db: AsyncSession = Depends(get_tenant_db),
):
    category = await _get_or_404(db, category_id)
    changes = data.model_dump(exclude_unset=True, exclude_none=True)

    if "name" in changes and changes["name"] != category.name:
        if await categories_repo.get_category_by_name(db, changes["name"]):
            raise ConflictError("Category with this name already exists")

    apply_changes(category, changes)
    await db.commit()
    await db.refresh(category)
    return category


@router.delete("/{category_id}", status_code=204, dependencies=[Depends(require_roles(UserRole.ADMIN))])
async def delete_category(
    category_id: int,
    db: AsyncSession = Depends(get_tenant_db),
):
    """Delete an empty category"""
    category = await _get_or_404(db, category_id)
    if await categories_repo.count_items(db, category):
        raise ConflictError("Category still has menu items")
    await categories_repo.delete_category(db, category)
    await db.commit()
