"""
Database connection management
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ..config import Settings
from ..dbmodels import metadata
from ..logging import get_logger

logger = get_logger(__name__)


class Database:
    """Owns an async engine and its session factory.

    Constructed explicitly by the application (or a test) and handed to the
    repositories that need it; there is no module-level connection pool.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self.session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )

    @classmethod
    def from_url(
        cls,
        database_url: str,
        *,
        pool_size: int = 10,
        max_overflow: int = 20,
        echo: bool = False,
    ) -> "Database":
        engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            echo=echo,
        )
        logger.info(
            "Database engine created",
            database_url=make_url(database_url).render_as_string(hide_password=True),
        )
        return cls(engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls.from_url(
            settings.async_database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            echo=settings.sql_echo,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get a session that commits on success and rolls back on error."""
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_schema(self) -> None:
        """Create any missing tables (CREATE TABLE IF NOT EXISTS semantics)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(metadata.create_all)
        logger.info("Database schema synchronized", tables=sorted(metadata.tables))

    async def check_connection(self) -> tuple[bool, str | None]:
        """
        Test the database connection and return helpful error messages.

        Returns:
            tuple: (success, error_message)
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
                return True, None
        except Exception as e:
            return False, describe_connection_error(e, self.engine.url.database)

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database engine disposed")


def describe_connection_error(error: Exception, database_name: str | None) -> str:
    """Turn a driver error into an operator-friendly message."""
    error_str = str(error)
    error_type = type(error).__name__

    if "does not exist" in error_str and ("database" in error_str or "role" in error_str):
        return (
            f"Cannot connect to database: {error_str}\n"
            f"This usually means:\n"
            f"  1. The database '{database_name}' doesn't exist\n"
            f"  2. The database user/role doesn't exist\n"
            f"Please check DB_NAME and DB_USER and run migrations if needed."
        )
    if "Connection refused" in error_str or "could not connect" in error_str:
        return (
            f"Cannot connect to database server: {error_str}\n"
            f"The database server appears to be down or unreachable.\n"
            f"Please check that PostgreSQL is running and DB_HOST is correct."
        )
    if "password authentication failed" in error_str:
        return (
            f"Database authentication failed: {error_str}\n"
            f"Please check your database credentials."
        )
    return f"Database connection error ({error_type}): {error_str}"
