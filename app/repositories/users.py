"""User repository"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User, UserRole
from app.repositories.base import scoped_select, add_scoped


async def get_user(db: AsyncSession, user_id: int) -> Optional[User]:
    result = await db.execute(scoped_select(db, User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(scoped_select(db, User).where(User.email == email))
    return result.scalar_one_or_none()


async def list_users(db: AsyncSession, role: Optional[UserRole] = None) -> List[User]:
    query = scoped_select(db, User)
    if role is not None:
        query = query.where(User.role == role)
    result = await db.execute(query.order_by(User.id))
    return list(result.scalars().all())


async def create_user(db: AsyncSession, user: User) -> User:
    add_scoped(db, user)
    await db.flush()
    await db.refresh(user)
    return user


async def delete_user(db: AsyncSession, user: User) -> None:
    await db.delete(user)
    await db.flush()


async def find_login_candidates(db: AsyncSession, email: str) -> List[User]:
    """Active users with ``email`` across all restaurants.

    Login runs before a tenant is known, so this is the one unscoped user
    lookup. The caller picks the account whose password matches.
    """
    result = await db.execute(
        select(User)
        .where(User.email == email, User.is_active.is_(True))
        .order_by(User.id)
    )
    return list(result.scalars().all())
