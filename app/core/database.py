"""Declarative base and database lifecycle helpers.

The engine and session factory are container singletons
(``container.infrastructure.db_engine`` / ``db_session_factory``); this
module owns the ORM ``Base`` and the startup checks that run against the
container's engine.
"""

import re
from typing import ClassVar

from sqlalchemy import MetaData, text
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.orm import DeclarativeBase, declared_attr

from app.core.logging import get_logger

logger = get_logger(__name__)

# ============================================
# Naming Convention
# ============================================
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)


# ============================================
# Base Model
# ============================================


class Base(DeclarativeBase):
    """Base class for all ORM models.

    Tables get snake_case names unless ``__tablename__`` is set, and
    constraints are named by ``NAMING_CONVENTION`` so Alembic diffs stay
    stable.
    """

    metadata: ClassVar[MetaData] = metadata

    @declared_attr.directive
    @classmethod
    def __tablename__(cls) -> str:
        return re.sub(r"(?<!^)(?=[A-Z])", "_", cls.__name__).lower()

    def __repr__(self) -> str:
        columns = ", ".join(
            f"{k}={v!r}"
            for k, v in self.__dict__.items()
            if not k.startswith("_") and k != "metadata"
        )
        return f"{self.__class__.__name__}({columns})"


# ============================================
# Lifecycle
# ============================================


def get_engine() -> AsyncEngine:
    """The application's pooled engine."""
    from app.core.container import container

    return container.infrastructure.db_engine()


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Create all tables.

    Development convenience only. Production schemas come from Alembic.
    """
    async with (engine or get_engine()).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database initialized")


async def check_db_connection(engine: AsyncEngine | None = None) -> bool:
    """Check if database connection is healthy.

    Returns:
        True if connection is successful, False otherwise
    """
    try:
        async with (engine or get_engine()).begin() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error("Database health check failed", error=str(e), exc_info=True)
        return False


__all__ = [
    "Base",
    "NAMING_CONVENTION",
    "check_db_connection",
    "get_engine",
    "init_db",
    "metadata",
]
