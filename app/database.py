"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 in async mode for the Library API.

WHY Async?
==========
Every request threads its own asyncio task from the ASGI server down to
the database driver. Cancelling that task (request deadline exceeded,
client gone) cancels the awaited driver call, so no query outlives the
request that issued it. A synchronous session running in a threadpool
cannot be interrupted that way.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives → create a new AsyncSession
2. Repositories use the session for all database operations in that request
3. Repositories commit on success, rollback on failure
4. Session is closed when the request ends

This is implemented using FastAPI's dependency injection.
"""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
# Key parameters:
# - pool_size: Number of connections to keep open permanently
# - max_overflow: How many extra connections can be created during high load
# - pool_pre_ping: Test connection health before using (prevents stale connections)
# - echo: Log all SQL statements (useful for debugging, disable in production)
#
# The engine does not connect until first use, so importing this module
# never touches the database.

engine = create_async_engine(
    settings.database_url,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_pre_ping=True,
    echo=settings.debug,
)


# =============================================================================
# Session Factory
# =============================================================================
# - expire_on_commit=False: entities stay readable after commit; in async
#   mode an expired attribute would need I/O to reload and cannot be
#   lazily loaded from a response serializer
# - autoflush=False: Don't auto-flush before queries (more predictable behavior)

SessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    All models inherit from this class:

        class Book(Base):
            __tablename__ = "books"
            ...

    Alembic uses Base.metadata to discover tables for migrations.
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency for FastAPI.

    Code before yield creates the session, code after yield closes it,
    even if the request failed or was cancelled.

    Usage in Routes:
        from app.dependencies import DbSession

        @router.get("/books")
        async def get_books(db: DbSession):
            ...

    Yields:
        SQLAlchemy AsyncSession instance
    """
    async with SessionLocal() as session:
        yield session


# =============================================================================
# Utility Functions
# =============================================================================
async def ping_database(session: AsyncSession) -> bool:
    """
    Check that the database answers a trivial query.

    Used by the health endpoint and at startup.

    Returns:
        True if SELECT 1 succeeded, False otherwise
    """
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error(f"Database ping failed: {exc}")
        return False
    return True


async def create_tables() -> None:
    """
    Create all database tables.

    WARNING: In production, use Alembic migrations instead!
    This function doesn't track schema changes or allow rollbacks.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_tables() -> None:
    """
    Drop all database tables.

    DANGER: This deletes all data! Never use in production.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def dispose_engine() -> None:
    """Close every pooled connection. Called on application shutdown."""
    await engine.dispose()
