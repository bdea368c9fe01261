"""Public restaurant pages: menu browsing, booking and ordering without login"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.database import get_db
from app.exceptions import NotFoundError
from app.models.restaurant import Restaurant, RestaurantStatus, is_platform_organization
from app.repositories import categories as categories_repo
from app.repositories import menu_items as menu_items_repo
from app.repositories import restaurants as restaurants_repo
from app.schemas.menu import CategoryResponse, MenuItemResponse
from app.schemas.order import PublicOrderCreate, OrderResponse
from app.schemas.reservation import PublicReservationCreate, ReservationResponse
from app.schemas.restaurant import PublicRestaurantResponse
from app.services import orders as order_service
from app.services import reservations as reservation_service
from app.tenancy.binder import bind_tenant_session
from app.tenancy.context import TenantContext

router = APIRouter()
logger = structlog.get_logger()


async def get_public_restaurant(
    restaurant_id: int,
    db: AsyncSession = Depends(get_db),
) -> Restaurant:
    """Active restaurant from the path; anything else is not found"""
    restaurant = await restaurants_repo.get_restaurant(db, restaurant_id)
    if (
        restaurant is None
        or is_platform_organization(restaurant.id)
        or restaurant.status != RestaurantStatus.ACTIVE
    ):
        raise NotFoundError("Restaurant not found")
    return restaurant


async def get_public_tenant_db(
    restaurant: Restaurant = Depends(get_public_restaurant),
    db: AsyncSession = Depends(get_db),
) -> AsyncSession:
    """Session bound to the path restaurant as an anonymous Client"""
    await bind_tenant_session(db, TenantContext.for_public(restaurant.id))
    structlog.contextvars.bind_contextvars(restaurant_id=restaurant.id)
    return db


@router.get("/{restaurant_id}", response_model=PublicRestaurantResponse)
async def get_restaurant(restaurant: Restaurant = Depends(get_public_restaurant)):
    return restaurant


@router.get("/{restaurant_id}/categories", response_model=List[CategoryResponse])
async def list_categories(db: AsyncSession = Depends(get_public_tenant_db)):
    return await categories_repo.list_categories(db, active_only=True)


@router.get("/{restaurant_id}/menu-items", response_model=List[MenuItemResponse])
async def list_menu_items(
    category_id: Optional[int] = None,
    db: AsyncSession = Depends(get_public_tenant_db),
):
    return await menu_items_repo.list_menu_items(db, category_id=category_id, available_only=True)


@router.get("/{restaurant_id}/menu-items/{item_id}", response_model=MenuItemResponse)
async def get_menu_item(
    item_id: int,
    db: AsyncSession = Depends(get_public_tenant_db),
):
    item = await menu_items_repo.get_menu_item(db, item_id)
    if item is None or not item.is_available:
        raise NotFoundError("Menu item not found")
    return item


@router.post("/{restaurant_id}/reservations", response_model=ReservationResponse, status_code=201)
async def create_reservation(
    data: PublicReservationCreate,
    db: AsyncSession = Depends(get_public_tenant_db),
):
    """Guest booking"""
    reservation = await reservation_service.create_reservation(db, **data.model_dump())
    await db.commit()
    return reservation


@router.post("/{restaurant_id}/orders", response_model=OrderResponse, status_code=201)
async def create_order(
    data: PublicOrderCreate,
    db: AsyncSession = Depends(get_public_tenant_db),
):
    """Guest order from the public menu"""
    order = await order_service.place_order(
        db,
        lines=[line.model_dump() for line in data.items],
        customer_name=data.customer_name,
        customer_phone=data.customer_phone,
        notes=data.notes,
    )
    await db.commit()
    return order
