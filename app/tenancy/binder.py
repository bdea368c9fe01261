"""
Session binder.

Attaches a ``TenantContext`` to an ``AsyncSession``. The context is kept in
``session.info`` for the repositories, and on PostgreSQL it is written into
transaction-local settings at the start of every transaction the session
opens. ``set_config(..., true)`` and ``SET LOCAL`` are discarded at commit or
rollback, so a pooled connection never carries a binding to its next user.
"""

import re
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import structlog
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from app.config import settings
from app.database import SessionLocal
from app.exceptions import TenantNotBoundError
from app.models.user import UserRole
from app.tenancy.context import TenantContext
from app.tenancy.policies import RESTAURANT_SETTING, ROLE_SETTING

logger = structlog.get_logger()

TENANT_INFO_KEY = "tenant"

_ROLE_NAME = re.compile(r"^[a-z_][a-z0-9_]*$")

SET_CONTEXT_SQL = text(
    f"SELECT set_config('{RESTAURANT_SETTING}', :restaurant_id, true), "
    f"set_config('{ROLE_SETTING}', :role, true)"
)
ROLE_EXISTS_SQL = text("SELECT EXISTS (SELECT 1 FROM pg_roles WHERE rolname = :role)")


def binding_params(ctx: TenantContext) -> dict:
    return {"restaurant_id": str(ctx.restaurant_id), "role": ctx.role.value}


def set_role_sql(role: str):
    # Role names cannot be bound parameters
    if not _ROLE_NAME.match(role):
        raise ValueError(f"Invalid role name: {role!r}")
    return text(f"SET LOCAL ROLE {role}")


def apply_binding(connection, ctx: TenantContext, app_role: Optional[str] = None) -> None:
    """Write the tenant binding into the connection's current transaction"""
    if connection.dialect.name != "postgresql":
        return

    connection.execute(SET_CONTEXT_SQL, binding_params(ctx))

    if app_role:
        if connection.execute(ROLE_EXISTS_SQL, {"role": app_role}).scalar():
            connection.execute(set_role_sql(app_role))
        else:
            logger.warning("RLS application role missing, policies rely on connecting role", role=app_role)


@event.listens_for(Session, "after_begin")
def _bind_on_begin(session, transaction, connection):
    ctx = session.info.get(TENANT_INFO_KEY)
    if ctx is None:
        return
    apply_binding(connection, ctx, settings.rls_app_role)


async def bind_tenant_session(session: AsyncSession, ctx: TenantContext) -> AsyncSession:
    """Bind ``session`` to ``ctx``.

    Safe to call more than once. If a transaction is already open the
    settings are written into it right away, otherwise the next begin picks
    them up.
    """
    session.info[TENANT_INFO_KEY] = ctx
    if session.in_transaction():
        connection = await session.connection()
        await connection.run_sync(apply_binding, ctx, settings.rls_app_role)
    else:
        # Begin now so a failing binding surfaces before the handler runs
        await session.connection()

    logger.debug(
        "Tenant session bound",
        restaurant_id=ctx.restaurant_id,
        role=ctx.role.value,
        user_id=ctx.user_id,
    )
    return session


def bound_context(session: AsyncSession) -> Optional[TenantContext]:
    return session.info.get(TENANT_INFO_KEY)


def require_bound_context(session: AsyncSession) -> TenantContext:
    ctx = bound_context(session)
    if ctx is None:
        raise TenantNotBoundError("Session has no tenant binding")
    return ctx


def clear_binding(session: AsyncSession) -> None:
    session.info.pop(TENANT_INFO_KEY, None)


@asynccontextmanager
async def acting_for_tenant(
    session: AsyncSession,
    restaurant_id: int,
    role: UserRole = UserRole.ADMIN,
) -> AsyncIterator[TenantContext]:
    """Temporarily rebind the open transaction to another tenant.

    The previous binding, if any, is restored on exit, including its
    PostgreSQL settings.
    """
    previous = bound_context(session)
    if previous is not None:
        ctx = previous.for_tenant(restaurant_id, role)
    else:
        ctx = TenantContext(user_id=None, restaurant_id=restaurant_id, role=role)

    await bind_tenant_session(session, ctx)
    try:
        yield ctx
    finally:
        if previous is not None:
            await bind_tenant_session(session, previous)
        else:
            clear_binding(session)
            if session.in_transaction():
                connection = await session.connection()
                await connection.run_sync(_reset_binding)


def _reset_binding(connection) -> None:
    if connection.dialect.name != "postgresql":
        return
    connection.execute(SET_CONTEXT_SQL, {"restaurant_id": "", "role": ""})
    connection.execute(text("RESET ROLE"))


@asynccontextmanager
async def tenant_session(ctx: TenantContext) -> AsyncIterator[AsyncSession]:
    """Standalone tenant-bound session outside the request cycle"""
    async with SessionLocal() as session:
        await bind_tenant_session(session, ctx)
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
