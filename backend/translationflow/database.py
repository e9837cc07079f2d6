"""
Database configuration and session management.
Uses async SQLAlchemy; asyncpg for PostgreSQL, aiosqlite for local SQLite.
"""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine
)
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from translationflow.config import Settings
from translationflow.utils.logging import get_logger

logger = get_logger(__name__)


def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async engine for the configured database.

    In-memory SQLite shares one connection so every session sees the
    same database.
    """
    url = settings.async_database_url
    if settings.is_sqlite:
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url.rstrip("/").endswith("aiosqlite:"):
            kwargs["poolclass"] = StaticPool
        return create_async_engine(url, echo=False, **kwargs)

    return create_async_engine(
        url,
        echo=settings.debug,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        pool_recycle=3600
    )


class Database:
    """
    Owns the engine and session factory for one application instance.

    Created by the application factory and stored on ``app.state``;
    request handlers receive sessions through the ``get_session``
    dependency rather than a module-level engine.
    """

    def __init__(self, settings: Settings):
        self.engine = build_engine(settings)
        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False
        )

    async def init_db(self) -> None:
        """
        Initialize database tables.

        Note: In production, use migrations instead.
        This is a convenience function for development/testing.
        """
        # Register table metadata before create_all
        import translationflow.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    async def close(self) -> None:
        """Dispose of all pooled connections."""
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager for getting database sessions.

        Commits on success and rolls back on any exception, which is
        re-raised unchanged.
        """
        async with self.session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def check_connection(self) -> bool:
        """
        Check if database is reachable.

        Returns True if connection succeeds, False otherwise.
        Used by health check endpoint.
        """
        try:
            async with self.session_maker() as session:
                await session.execute(text("SELECT 1"))
                return True
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Database health check failed", error=str(e))
            return False


def get_database(request: Request) -> Database:
    """Return the Database bound to the running application."""
    return request.app.state.db


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting database sessions.

    Usage in FastAPI:
        @router.get("/items")
        async def get_items(session: AsyncSession = Depends(get_session)):
            ...

    The session is committed after the request handler returns.
    """
    async with get_database(request).session() as session:
        yield session
