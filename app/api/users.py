"""User management API endpoints (tenant Admins)"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.api.auth import TENANT_ASSIGNABLE_ROLES, get_tenant_db, require_roles
from app.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.user import User, UserRole
from app.repositories import users as users_repo
from app.repositories.base import apply_changes
from app.schemas.auth import UserResponse
from app.schemas.user import UserCreate, UserUpdate, UserStatusUpdate
from app.security import get_password_hash
from app.tenancy.context import TenantContext

router = APIRouter()
logger = structlog.get_logger()

tenant_admin = require_roles(UserRole.ADMIN)


async def _get_or_404(db: AsyncSession, user_id: int) -> User:
    user = await users_repo.get_user(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def _check_role(role: UserRole) -> None:
    if role not in TENANT_ASSIGNABLE_ROLES:
        raise ValidationError("KAM users cannot be created here, use the KAM endpoint")


@router.get("", response_model=List[UserResponse], dependencies=[Depends(tenant_admin)])
async def list_users(
    role: Optional[UserRole] = None,
    db: AsyncSession = Depends(get_tenant_db),
):
    return await users_repo.list_users(db, role=role)


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(
    data: UserCreate,
    ctx: TenantContext = Depends(tenant_admin),
    db: AsyncSession = Depends(get_tenant_db),
):
    _check_role(data.role)
    if await users_repo.get_user_by_email(db, data.email):
        raise ConflictError("User with this email already exists in this restaurant")

    fields = data.model_dump(exclude={"password"})
    user = await users_repo.create_user(
        db,
        User(hashed_password=get_password_hash(data.password), is_active=True, **fields),
    )
    await db.commit()
    logger.info("User created", user_id=user.id, role=user.role.value, created_by=ctx.user_id)
    return user


@router.get("/{user_id}", response_model=UserResponse, dependencies=[Depends(tenant_admin)])
async def get_user(
    user_id: int,
    db: AsyncSession = Depends(get_tenant_db),
):
    return await _get_or_404(db, user_id)


@router.put("/{user_id}", response_model=UserResponse, dependencies=[Depends(tenant_admin)])
async def update_user(
    user_id: int,
    data: UserUpdate,
    db: AsyncSession = Depends(get_tenant_db),
):
    user = await _get_or_404(db, user_id)
    changes = data.model_dump(exclude_unset=True, exclude_none=True)

    if "role" in changes and changes["role"] != user.role:
        _check_role(changes["role"])
    if "email" in changes and changes["email"] != user.email:
        if await users_repo.get_user_by_email(db, changes["email"]):
            raise ConflictError("User with this email already exists in this restaurant")
    if "password" in changes:
        changes["hashed_password"] = get_password_hash(changes.pop("password"))

    apply_changes(user, changes)
    await db.commit()
    await db.refresh(user)
    return user


@router.patch("/{user_id}/status", response_model=UserResponse)
async def update_user_status(
    user_id: int,
    data: UserStatusUpdate,
    ctx: TenantContext = Depends(tenant_admin),
    db: AsyncSession = Depends(get_tenant_db),
):
    """Enable or disable an account; Admins cannot disable themselves"""
    user = await _get_or_404(db, user_id)
    if user.id == ctx.user_id and not data.is_active:
        raise ValidationError("You cannot deactivate your own account")
    user.is_active = data.is_active
    await db.commit()
    await db.refresh(user)
    return user


@router.delete("/{user_id}", status_code=204)
async def delete_user(
    user_id: int,
    ctx: TenantContext = Depends(tenant_admin),
    db: AsyncSession = Depends(get_tenant_db),
):
    user = await _get_or_404(db, user_id)
    if user.id == ctx.user_id:
        raise ValidationError("You cannot delete your own account")
    await users_repo.delete_user(db, user)
    await db.commit()
