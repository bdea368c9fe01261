"""Schema version check run at startup"""

from pathlib import Path
from typing import Optional

from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
import structlog

from app.exceptions import SchemaVersionError

logger = structlog.get_logger()

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def head_revision(config_path: Path = ALEMBIC_INI) -> Optional[str]:
    script = ScriptDirectory.from_config(Config(str(config_path)))
    return script.get_current_head()


def _current_revision(connection) -> Optional[str]:
    return MigrationContext.configure(connection).get_current_revision()


async def check_schema_revision(async_engine, config_path: Path = ALEMBIC_INI) -> str:
    """Refuse to serve against a database that is not at the latest migration.

    Raises:
        SchemaVersionError: database revision differs from the migration head
    """
    head = head_revision(config_path)
    async with async_engine.connect() as connection:
        current = await connection.run_sync(_current_revision)

    if current != head:
        raise SchemaVersionError(
            f"Database schema is at revision {current!r}, expected {head!r}; run 'alembic upgrade head'"
        )

    logger.info("Database schema up to date", revision=current)
    return current
