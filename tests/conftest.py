"""
pytest Fixtures for Library API Tests

This file contains shared fixtures used across all test files.

FIXTURE OVERVIEW:
- engine: a fresh SQLite database (file under tmp_path) per test, with
  all tables created and foreign keys enforced
- session_factory / db_session: sessions bound to that engine, for
  arranging data and for repository tests
- client: an httpx AsyncClient talking to the app in-process, with
  get_db overridden so each request gets its own session on the test
  database
- sample_author / sample_book / orphan_book: test data

Every fixture is function scoped, so tests never see each other's rows.

IMPORTANT: Some PostgreSQL features won't work in SQLite.
For integration tests, use a real PostgreSQL test database.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app.
# Settings are validated on import and every one of these is required.
import os

os.environ["ENVIRONMENT"] = "development"
os.environ["HOST"] = "127.0.0.1"
os.environ["PORT"] = "8080"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["LOG_FORMAT"] = "text"
os.environ["DATABASE_HOST"] = "localhost"
os.environ["DATABASE_PORT"] = "5432"
os.environ["DATABASE_USER"] = "library"
os.environ["DATABASE_PASSWORD"] = "library-test-password"
os.environ["DATABASE_NAME"] = "library_test"

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.database import Base, get_db
from app.main import app
from app.models import Author, Book
from app.services.rate_limiter import limiter

API = "/api"


# =============================================================================
# DATABASE FIXTURES
# =============================================================================
@pytest.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """
    Create a SQLite database for one test.

    A file database (rather than :memory:) lets the app's per-request
    sessions and the test's own session use separate connections, just
    like against PostgreSQL.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")

    # SQLite ignores foreign keys (and ON DELETE SET NULL) unless asked
    @event.listens_for(engine.sync_engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory configured like app.database.SessionLocal."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """A session for arranging test data and exercising repositories."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with the test database.

    We override the get_db dependency so every request opens its own
    session on the test engine. raise_app_exceptions=False lets tests
    observe the 500 envelope instead of the raw exception.
    """

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    # Every test starts with a fresh request budget
    limiter.reset()

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
@pytest.fixture
async def sample_author(db_session: AsyncSession) -> Author:
    """Create a sample author for testing."""
    author = Author(name="George Orwell")
    db_session.add(author)
    await db_session.commit()
    return author


@pytest.fixture
async def sample_book(db_session: AsyncSession, sample_author: Author) -> Book:
    """Create a sample book written by sample_author."""
    book = Book(
        title="1984",
        description="A dystopian novel set in a totalitarian society.",
        author_id=sample_author.id,
    )
    db_session.add(book)
    await db_session.commit()
    return book


@pytest.fixture
async def orphan_book(db_session: AsyncSession) -> Book:
    """Create a book that has no author."""
    book = Book(
        title="Beowulf",
        description="Old English epic poem of unknown authorship.",
        author_id=None,
    )
    db_session.add(book)
    await db_session.commit()
    return book
