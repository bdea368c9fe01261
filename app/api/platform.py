"""Platform staff API endpoints"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.auth import get_tenant_db, require_platform_staff
from app.schemas.auth import UserResponse
from app.schemas.platform import KAMCreate
from app.services import platform as platform_service
from app.tenancy.context import TenantContext

router = APIRouter()


@router.post("/kams", response_model=UserResponse, status_code=201)
async def create_kam(
    data: KAMCreate,
    ctx: TenantContext = Depends(require_platform_staff),
    db: AsyncSession = Depends(get_tenant_db),
):
    """Create a Key Account Manager in the platform organization"""
    user = await platform_service.create_kam(db, ctx, **data.model_dump())
    await db.commit()
    return user


@router.get("/kams", response_model=List[UserResponse])
async def list_kams(
    ctx: TenantContext = Depends(require_platform_staff),
    db: AsyncSession = Depends(get_tenant_db),
):
    return await platform_service.list_kams(db, ctx)
