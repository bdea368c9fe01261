"""Restaurant registry API endpoints"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.auth import get_tenant_db, require_kam, require_platform_staff
from app.database import get_db
from app.models.restaurant import RestaurantStatus
from app.schemas.restaurant import (
    RestaurantRegister,
    RestaurantResponse,
    RestaurantStatusUpdate,
    AssignKAMRequest,
)
from app.services import restaurants as restaurant_service
from app.services.email import BaseEmailSender, get_email_sender
from app.tenancy.context import TenantContext

router = APIRouter()


@router.post("/register", response_model=RestaurantResponse, status_code=201)
async def register_restaurant(
    data: RestaurantRegister,
    db: AsyncSession = Depends(get_db),
):
    """Public self-registration; the restaurant stays pending until a KAM activates it"""
    restaurant = await restaurant_service.register_restaurant(db, **data.model_dump())
    await db.commit()
    return restaurant


@router.get("", response_model=List[RestaurantResponse], dependencies=[Depends(require_platform_staff)])
async def list_restaurants(
    status: Optional[RestaurantStatus] = None,
    kam_id: Optional[int] = None,
    db: AsyncSession = Depends(get_tenant_db),
):
    """Restaurant registry, optionally filtered by status and assigned KAM"""
    return await restaurant_service.list_restaurants(db, status=status, kam_id=kam_id)


@router.get("/pending", response_model=List[RestaurantResponse], dependencies=[Depends(require_platform_staff)])
async def list_pending_restaurants(
    db: AsyncSession = Depends(get_tenant_db),
):
    return await restaurant_service.list_pending(db)


@router.get("/{restaurant_id}", response_model=RestaurantResponse, dependencies=[Depends(require_platform_staff)])
async def get_restaurant(
    restaurant_id: int,
    db: AsyncSession = Depends(get_tenant_db),
):
    return await restaurant_service.get_restaurant(db, restaurant_id)


@router.post("/{restaurant_id}/activate", response_model=RestaurantResponse)
async def activate_restaurant(
    restaurant_id: int,
    ctx: TenantContext = Depends(require_kam),
    db: AsyncSession = Depends(get_tenant_db),
    email_sender: BaseEmailSender = Depends(get_email_sender),
):
    """Activate a restaurant and provision its Admin account (KAM only)"""
    return await restaurant_service.activate_restaurant(db, ctx, restaurant_id, email_sender)


@router.patch("/{restaurant_id}/status", response_model=RestaurantResponse, dependencies=[Depends(require_platform_staff)])
async def update_restaurant_status(
    restaurant_id: int,
    data: RestaurantStatusUpdate,
    db: AsyncSession = Depends(get_tenant_db),
):
    restaurant = await restaurant_service.update_restaurant_status(db, restaurant_id, data.status)
    await db.commit()
    return restaurant


@router.put("/{restaurant_id}/assign-kam", response_model=RestaurantResponse, dependencies=[Depends(require_platform_staff)])
async def assign_kam(
    restaurant_id: int,
    data: AssignKAMRequest,
    db: AsyncSession = Depends(get_tenant_db),
):
    restaurant = await restaurant_service.assign_kam(db, restaurant_id, data.kam_id)
    await db.commit()
    return restaurant
