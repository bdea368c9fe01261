"""Database engine, session factory and declarative base"""

from typing import AsyncGenerator

import structlog
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.config import settings

logger = structlog.get_logger()


class Base(DeclarativeBase):
    """Declarative base for all models"""
    pass


def _engine_options(url: str) -> dict:
    options = {"echo": settings.db_echo, "pool_pre_ping": True}
    if url.startswith("postgresql"):
        options["pool_size"] = settings.db_pool_size
    return options


engine = create_async_engine(settings.database_url, **_engine_options(settings.database_url))

SessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


def install_pool_guards(async_engine) -> None:
    """Clear session-level settings on PostgreSQL connections returned to the pool.

    Tenant bindings are transaction-local, so this only catches settings
    that were set with session scope by mistake.
    """
    sync_engine = async_engine.sync_engine
    if sync_engine.dialect.name != "postgresql":
        return

    @event.listens_for(sync_engine, "checkin")
    def _reset_session_settings(dbapi_connection, connection_record):
        if dbapi_connection is None:
            return
        try:
            dbapi_connection.run_async(lambda conn: conn.execute("RESET ALL"))
        except Exception:
            # A connection that cannot be reset must not be reused
            logger.warning("Pool connection reset failed, invalidating", exc_info=True)
            connection_record.invalidate()


install_pool_guards(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an unbound session (auth, registration, bootstrap)"""
    async with SessionLocal() as session:
        yield session
