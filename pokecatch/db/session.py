"""Async database session management.

Invariants:
    - One async engine per process, created by ``init_db`` at startup
    - Every session rolls back on error; no partial commit leaks
    - SQLAlchemy errors escaping a request are mapped to DatabaseAppError
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from pokecatch.core.errors import DatabaseAppError
from pokecatch.db.base import Base

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Owns the async engine and hands out sessions with automatic rollback."""

    def __init__(
        self,
        database_url: str,
        *,
        echo: bool = False,
        pool_size: int = 20,
        max_overflow: int = 10,
    ) -> None:
        engine_kwargs: dict[str, Any] = {"echo": echo, "pool_pre_ping": True}
        # SQLite file and memory databases don't take queue pool sizing.
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )

        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a session; roll back and translate SQLAlchemy failures."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as exc:
            await session.rollback()
            logger.error(
                "db.error",
                extra={"error_type": type(exc).__name__},
            )
            raise DatabaseAppError(
                code="database_error",
                message="Internal Server Error",
            ) from exc
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create_all(self) -> None:
        """Create any missing tables."""
        # Import for side effect: registers every model on Base.metadata.
        import pokecatch.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as exc:
            logger.error("db.health_check_failed", extra={"error_type": type(exc).__name__})
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Initialized on startup by the application lifespan
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs: Any) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


def get_db_manager() -> DatabaseSessionManager:
    if db_manager is None:
        raise RuntimeError("Database not initialized")
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    async with get_db_manager().session() as session:
        yield session
