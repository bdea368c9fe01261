"""Own-account endpoints available to every authenticated user"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.api.auth import get_tenant_context, get_tenant_db
from app.exceptions import TenantContextError, ValidationError
from app.models.user import User
from app.repositories import users as users_repo
from app.repositories.base import apply_changes
from app.schemas.auth import UserResponse
from app.schemas.user import ProfileUpdate, PasswordChange, PreferencesUpdate
from app.security import get_password_hash, verify_password
from app.tenancy.context import TenantContext

router = APIRouter()
logger = structlog.get_logger()


async def get_current_user(
    ctx: TenantContext = Depends(get_tenant_context),
    db: AsyncSession = Depends(get_tenant_db),
) -> User:
    """The caller's own account, looked up inside their restaurant"""
    user = await users_repo.get_user(db, ctx.user_id)
    if user is None or not user.is_active:
        raise TenantContextError("User no longer exists")
    return user


@router.get("", response_model=UserResponse)
async def get_profile(user: User = Depends(get_current_user)):
    return user


@router.put("", response_model=UserResponse)
async def update_profile(
    data: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_tenant_db),
):
    """Update name, phone, timezone and language; role and email stay as they are"""
    apply_changes(user, data.model_dump(exclude_unset=True, exclude_none=True))
    await db.commit()
    await db.refresh(user)
    return user


@router.put("/password")
async def change_password(
    data: PasswordChange,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_tenant_db),
):
    if not verify_password(data.current_password, user.hashed_password):
        raise ValidationError("Current password is incorrect")

    user.hashed_password = get_password_hash(data.new_password)
    await db.commit()

    logger.info("Password changed", user_id=user.id)
    return {"message": "Password changed successfully"}


@router.put("/preferences", response_model=UserResponse)
async def update_preferences(
    data: PreferencesUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_tenant_db),
):
    user.preferences = data.preferences
    await db.commit()
    await db.refresh(user)
    return user
