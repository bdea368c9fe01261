"""
Restaurant lifecycle.

Restaurants register themselves as ``pending``. A KAM activates them, which
provisions the restaurant's first Admin account and emails its temporary
credentials. Platform staff may afterwards move a restaurant between
statuses freely and reassign its KAM.
"""

from datetime import datetime
from typing import List, Optional, Tuple

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.exceptions import ConflictError, NotFoundError, PermissionDeniedError, ValidationError
from app.models.restaurant import Restaurant, RestaurantStatus, is_platform_organization
from app.models.user import User, UserRole
from app.repositories import restaurants as restaurants_repo
from app.repositories import users as users_repo
from app.security import generate_temporary_password, get_password_hash
from app.services.email import BaseEmailSender
from app.services.platform import get_active_kam
from app.tenancy.binder import acting_for_tenant
from app.tenancy.context import TenantContext

logger = structlog.get_logger()


def split_contact_name(full_name: Optional[str]) -> Tuple[str, str]:
    parts = (full_name or "").split()
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


async def register_restaurant(
    db: AsyncSession,
    name: str,
    email: str,
    contact_name: str,
    contact_email: str,
    description: Optional[str] = None,
    address: Optional[str] = None,
    phone: Optional[str] = None,
    contact_phone: Optional[str] = None,
) -> Restaurant:
    """Public self-registration; the restaurant waits for KAM activation"""
    if await restaurants_repo.get_restaurant_by_email(db, email):
        raise ConflictError("Restaurant with this email already exists")

    restaurant = await restaurants_repo.create_restaurant(
        db,
        Restaurant(
            name=name,
            description=description,
            address=address,
            phone=phone,
            email=email,
            status=RestaurantStatus.PENDING,
            is_active=False,
            contact_name=contact_name,
            contact_email=contact_email,
            contact_phone=contact_phone,
        ),
    )
    logger.info("Restaurant registered", restaurant_id=restaurant.id, email=email)
    return restaurant


async def get_restaurant(db: AsyncSession, restaurant_id: int) -> Restaurant:
    restaurant = await restaurants_repo.get_restaurant(db, restaurant_id)
    if restaurant is None or is_platform_organization(restaurant.id):
        raise NotFoundError("Restaurant not found")
    return restaurant


async def list_restaurants(
    db: AsyncSession,
    status: Optional[RestaurantStatus] = None,
    kam_id: Optional[int] = None,
) -> List[Restaurant]:
    return await restaurants_repo.list_restaurants(db, status=status, kam_id=kam_id)


async def list_pending(db: AsyncSession) -> List[Restaurant]:
    return await restaurants_repo.list_restaurants(db, status=RestaurantStatus.PENDING)


async def activate_restaurant(
    db: AsyncSession,
    ctx: TenantContext,
    restaurant_id: int,
    email_sender: BaseEmailSender,
) -> Restaurant:
    """
    Activate a pending restaurant and provision its Admin account.

    Runs in the caller's transaction with the restaurant row locked, and
    commits before the welcome email goes out. A failed email is logged and
    never undoes the activation.

    Raises:
        PermissionDeniedError: caller is not a platform KAM
        NotFoundError: no such restaurant
        ConflictError: restaurant already active, or its Admin already exists
    """
    if not ctx.is_kam:
        raise PermissionDeniedError("Only KAM users can activate restaurants")

    restaurant = await restaurants_repo.get_restaurant(db, restaurant_id, for_update=True)
    if restaurant is None or is_platform_organization(restaurant.id):
        raise NotFoundError("Restaurant not found")

    if restaurant.status == RestaurantStatus.ACTIVE:
        raise ConflictError("Restaurant is already active")

    if not restaurant.contact_email:
        raise ValidationError("Restaurant has no contact email")

    temporary_password = generate_temporary_password()
    first_name, last_name = split_contact_name(restaurant.contact_name)

    async with acting_for_tenant(db, restaurant.id, UserRole.ADMIN):
        if await users_repo.get_user_by_email(db, restaurant.contact_email):
            raise ConflictError("Admin user already exists for this restaurant")

        admin = await users_repo.create_user(
            db,
            User(
                email=restaurant.contact_email,
                hashed_password=get_password_hash(temporary_password),
                first_name=first_name,
                last_name=last_name,
                phone=restaurant.contact_phone,
                role=UserRole.ADMIN,
                is_active=True,
            ),
        )

    restaurant.status = RestaurantStatus.ACTIVE
    restaurant.is_active = True
    restaurant.activated_by = ctx.user_id
    restaurant.activated_at = datetime.utcnow()
    if restaurant.kam_id is None:
        restaurant.kam_id = ctx.user_id

    await db.commit()

    logger.info(
        "Restaurant activated",
        restaurant_id=restaurant.id,
        activated_by=ctx.user_id,
        admin_user_id=admin.id,
    )

    await send_welcome_email(email_sender, restaurant, temporary_password)
    return restaurant


async def send_welcome_email(
    email_sender: BaseEmailSender,
    restaurant: Restaurant,
    temporary_password: str,
) -> bool:
    """Best effort; returns whether the provider accepted the message"""
    try:
        await email_sender.send_template(
            template_id=settings.welcome_email_template_id,
            to_email=restaurant.contact_email,
            to_name=restaurant.contact_name,
            params={
                "restaurant_name": restaurant.name,
                "contact_name": restaurant.contact_name,
                "email": restaurant.contact_email,
                "temporary_password": temporary_password,
                "login_url": f"{settings.frontend_url.rstrip('/')}/login",
            },
        )
    except Exception as e:
        logger.error(
            "Welcome email failed",
            restaurant_id=restaurant.id,
            to=restaurant.contact_email,
            error=str(e),
        )
        return False
    return True


async def update_restaurant_status(
    db: AsyncSession,
    restaurant_id: int,
    status: RestaurantStatus,
) -> Restaurant:
    restaurant = await get_restaurant(db, restaurant_id)
    restaurant.status = status
    restaurant.is_active = status == RestaurantStatus.ACTIVE
    await db.flush()
    logger.info("Restaurant status updated", restaurant_id=restaurant.id, status=status.value)
    return restaurant


async def assign_kam(db: AsyncSession, restaurant_id: int, kam_id: int) -> Restaurant:
    """Assign ``kam_id`` as the restaurant's KAM; ``db`` must be platform bound"""
    kam = await get_active_kam(db, kam_id)
    if kam is None:
        raise ValidationError("Invalid KAM")

    restaurant = await get_restaurant(db, restaurant_id)
    restaurant.kam_id = kam.id
    await db.flush()
    logger.info("KAM assigned", restaurant_id=restaurant.id, kam_id=kam.id)
    return restaurant
