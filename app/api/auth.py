"""Authentication API endpoints and tenant-scoped dependencies"""

from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.config import settings
from app.database import get_db
from app.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    TenantContextError,
    ValidationError,
)
from app.models.restaurant import RestaurantStatus
from app.models.user import User, UserRole
from app.repositories import restaurants as restaurants_repo
from app.repositories import users as users_repo
from app.schemas.auth import Token, LoginRequest, RegisterRequest, UserResponse
from app.security import create_access_token, decode_access_token, get_password_hash, verify_password
from app.tenancy.binder import bind_tenant_session
from app.tenancy.context import TenantContext

router = APIRouter()
logger = structlog.get_logger()

# OAuth2 scheme
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

# Roles a tenant Admin may hand out; KAMs are created by platform staff only
TENANT_ASSIGNABLE_ROLES = (UserRole.ADMIN, UserRole.STAFF, UserRole.CLIENT)


async def get_tenant_context(token: str = Depends(oauth2_scheme)) -> TenantContext:
    """Resolve the caller's tenant scope from the bearer token.

    Any token that does not carry a complete scope is rejected before a
    query can run.
    """
    try:
        claims = decode_access_token(token)
    except JWTError:
        raise TenantContextError("Could not validate credentials")
    return TenantContext.from_claims(claims)


async def get_tenant_db(
    ctx: TenantContext = Depends(get_tenant_context),
    db: AsyncSession = Depends(get_db),
) -> AsyncSession:
    """Session bound to the caller's restaurant for the rest of the request"""
    await bind_tenant_session(db, ctx)
    structlog.contextvars.bind_contextvars(restaurant_id=ctx.restaurant_id, user_id=ctx.user_id)
    return db


def require_roles(*roles: UserRole):
    """Dependency factory for role-based access control"""
    async def role_checker(ctx: TenantContext = Depends(get_tenant_context)) -> TenantContext:
        if ctx.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return ctx
    return role_checker


async def require_platform_staff(ctx: TenantContext = Depends(get_tenant_context)) -> TenantContext:
    """KAMs and Admins of the platform organization only"""
    if not ctx.is_platform_staff:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Platform staff access required",
        )
    return ctx


async def require_kam(ctx: TenantContext = Depends(require_platform_staff)) -> TenantContext:
    if not ctx.is_kam:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only KAM users can perform this action",
        )
    return ctx


def _select_account(candidates: List[User], request: LoginRequest):
    if request.restaurant_id is not None:
        candidates = [user for user in candidates if user.restaurant_id == request.restaurant_id]
    for user in candidates:
        if verify_password(request.password, user.hashed_password):
            return user
    return None


@router.post("/login", response_model=Token)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """Authenticate user and return an access token"""
    candidates = await users_repo.find_login_candidates(db, request.email)
    user = _select_account(candidates, request)

    if user is None:
        logger.info("Login failed", email=request.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # Update last login
    user.last_login = datetime.utcnow()
    await db.commit()

    logger.info("Login succeeded", user_id=user.id, restaurant_id=user.restaurant_id)
    return Token(
        access_token=create_access_token(user),
        expires_in=settings.access_token_expire_minutes * 60,
        user=UserResponse.model_validate(user),
    )


@router.post("/register", response_model=UserResponse, status_code=201)
async def register(
    request: RegisterRequest,
    ctx: TenantContext = Depends(require_roles(UserRole.ADMIN)),
    db: AsyncSession = Depends(get_tenant_db),
):
    """Create a user in the caller's restaurant (tenant Admins only)"""
    if request.role not in TENANT_ASSIGNABLE_ROLES:
        raise ValidationError("KAM users cannot be created here, use the KAM endpoint")
    if ctx.is_platform_staff:
        raise PermissionDeniedError("Platform accounts are managed through the KAM endpoints")

    restaurant = await restaurants_repo.get_restaurant(db, ctx.restaurant_id)
    if restaurant is None:
        raise NotFoundError("Restaurant not found")
    if restaurant.status != RestaurantStatus.ACTIVE:
        raise ValidationError("Restaurant is not active")

    if await users_repo.get_user_by_email(db, request.email):
        raise ConflictError("User with this email already exists in this restaurant")

    user = await users_repo.create_user(
        db,
        User(
            email=request.email,
            hashed_password=get_password_hash(request.password),
            first_name=request.first_name,
            last_name=request.last_name,
            phone=request.phone,
            role=request.role,
            is_active=True,
        ),
    )
    await db.commit()

    logger.info("User registered", user_id=user.id, role=user.role.value, created_by=ctx.user_id)
    return user


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    ctx: TenantContext = Depends(get_tenant_context),
    db: AsyncSession = Depends(get_tenant_db),
):
    """Get current user information"""
    user = await users_repo.get_user(db, ctx.user_id)
    if user is None or not user.is_active:
        raise TenantContextError("User no longer exists")
    return user
