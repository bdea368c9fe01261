"""
Platform organization.

Restaurant id 1 is reserved for the platform itself. It owns the KAM
accounts and the bootstrap administrator, and it must exist before any real
restaurant is registered so that tenants start at id 2.
"""

from typing import List, Optional

import structlog
from email_validator import EmailNotValidError, validate_email
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.exceptions import BootstrapError, ConflictError, PermissionDeniedError
from app.models.restaurant import Restaurant, RestaurantStatus, PLATFORM_ORGANIZATION_ID
from app.models.user import User, UserRole
from app.repositories import users as users_repo
from app.security import get_password_hash
from app.tenancy.binder import acting_for_tenant
from app.tenancy.context import TenantContext

logger = structlog.get_logger()

PLATFORM_NAME = "Platform Organization"
PLATFORM_DESCRIPTION = "Platform-level organization for KAM and system administrators"
PLATFORM_EMAIL = "platform@system.local"

# Development only, never accepted in production
DEFAULT_BOOTSTRAP_PASSWORD = "ChangeMe123!"

SYNC_SEQUENCE_SQL = text(
    "SELECT setval('restaurants_id_seq', GREATEST((SELECT COALESCE(MAX(id), 0) FROM restaurants), 1), true)"
)


async def ensure_platform_organization(db: AsyncSession) -> Restaurant:
    platform = await db.get(Restaurant, PLATFORM_ORGANIZATION_ID)
    if platform is not None:
        logger.info("Platform organization already exists")
        return platform

    platform = Restaurant(
        id=PLATFORM_ORGANIZATION_ID,
        name=PLATFORM_NAME,
        description=PLATFORM_DESCRIPTION,
        email=PLATFORM_EMAIL,
        status=RestaurantStatus.ACTIVE,
        is_active=True,
    )
    db.add(platform)
    await db.flush()
    logger.info("Platform organization created", restaurant_id=PLATFORM_ORGANIZATION_ID)
    return platform


async def sync_restaurant_sequence(db: AsyncSession) -> None:
    """Move the id sequence past the explicitly inserted platform row"""
    connection = await db.connection()
    if connection.dialect.name != "postgresql":
        return
    await db.execute(SYNC_SEQUENCE_SQL)


def _bootstrap_email(settings: Settings) -> str:
    try:
        return validate_email(settings.bootstrap_admin_email, check_deliverability=False).normalized
    except EmailNotValidError as e:
        raise BootstrapError(f"BOOTSTRAP_ADMIN_EMAIL is not a valid address: {e}") from e


def _bootstrap_password(settings: Settings) -> str:
    if settings.bootstrap_admin_password:
        return settings.bootstrap_admin_password
    if settings.is_production:
        raise BootstrapError("BOOTSTRAP_ADMIN_PASSWORD is required in production")
    logger.warning(
        "Using default bootstrap admin password, set BOOTSTRAP_ADMIN_PASSWORD",
        email=settings.bootstrap_admin_email,
    )
    return DEFAULT_BOOTSTRAP_PASSWORD


async def bootstrap_platform(db: AsyncSession, settings: Settings) -> Optional[User]:
    """
    Create the platform organization and the first KAM.

    Idempotent: existing rows are left alone. Returns the KAM created by this
    run, or ``None`` when one already existed. Commits on success.

    Raises:
        BootstrapError: invalid bootstrap email, or production run without a
            bootstrap password
    """
    await ensure_platform_organization(db)
    await sync_restaurant_sequence(db)

    created = None
    async with acting_for_tenant(db, PLATFORM_ORGANIZATION_ID, UserRole.KAM):
        existing = await users_repo.list_users(db, role=UserRole.KAM)
        if existing:
            logger.info("Platform KAM already exists", count=len(existing))
        else:
            email = _bootstrap_email(settings)
            password = _bootstrap_password(settings)
            created = await users_repo.create_user(
                db,
                User(
                    email=email,
                    hashed_password=get_password_hash(password),
                    first_name="Platform",
                    last_name="Administrator",
                    role=UserRole.KAM,
                    is_active=True,
                ),
            )
            logger.info("Initial platform KAM created", email=created.email, user_id=created.id)

    await db.commit()
    return created


async def create_kam(
    db: AsyncSession,
    ctx: TenantContext,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    phone: Optional[str] = None,
) -> User:
    """Create a KAM under the platform organization.

    ``db`` must be bound to ``ctx``, which in turn must be platform staff.
    """
    if not ctx.is_platform_staff:
        raise PermissionDeniedError("Only platform staff can create KAM users")

    if await users_repo.get_user_by_email(db, email):
        raise ConflictError("User with this email already exists")

    user = await users_repo.create_user(
        db,
        User(
            email=email,
            hashed_password=get_password_hash(password),
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            role=UserRole.KAM,
            is_active=True,
        ),
    )
    logger.info("KAM created", user_id=user.id, created_by=ctx.user_id)
    return user


async def list_kams(db: AsyncSession, ctx: TenantContext) -> List[User]:
    if not ctx.is_platform_staff:
        raise PermissionDeniedError("Only platform staff can list KAM users")
    return await users_repo.list_users(db, role=UserRole.KAM)


async def get_active_kam(db: AsyncSession, kam_id: int) -> Optional[User]:
    """Active KAM with ``kam_id``; ``db`` must be bound to the platform organization"""
    user = await users_repo.get_user(db, kam_id)
    if user is None or user.role != UserRole.KAM or not user.is_active:
        return None
    return user
