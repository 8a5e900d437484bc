"""Database configuration and session management."""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

# Base class for all models
Base = declarative_base()


class Database:
    """Database connection manager."""

    def __init__(self, database_url: str, echo: bool = False, **engine_options: Any):
        """Initialize database with connection URL.

        Args:
            database_url: SQLAlchemy URL. Plain ``postgresql://`` URLs are
                switched to the asyncpg driver.
            echo: Log emitted SQL.
            **engine_options: Extra ``create_async_engine`` arguments, e.g. a
                ``poolclass`` for in-memory SQLite.
        """
        # Convert to async URL if needed
        if database_url.startswith("postgresql://"):
            database_url = database_url.replace(
                "postgresql://", "postgresql+asyncpg://"
            )

        # Bound parameters include admin identifiers and must not be logged
        options: dict[str, Any] = {
            "echo": echo,
            "pool_pre_ping": True,
            "hide_parameters": True,
        }
        if not database_url.startswith("sqlite"):
            options.update(pool_size=10, max_overflow=20)
        options.update(engine_options)

        self.url = database_url
        self.engine = create_async_engine(database_url, **options)

        self.async_session = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get database session."""
        async with self.async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def create_tables(self) -> None:
        """Create all tables."""
        # Register the models on Base.metadata
        from . import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_tables(self) -> None:
        """Drop all tables (use with caution)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def close(self) -> None:
        """Close database connections."""
        await self.engine.dispose()
