"""
MenuBoard — Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the entire test suite.
How:   Environment variables point the app at a throwaway SQLite file BEFORE
       any menuboard module is imported, so the module-level engine and
       settings pick them up.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock database session (no real DB needed)
    ├── reset_schema: Drops and recreates every table in the test database
    ├── db_session: Real AsyncSession on the freshly reset database
    ├── valid_payload: A restaurant body that passes every rule
    └── test_client: HTTPX AsyncClient talking to the ASGI app
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any app imports
_test_dir = tempfile.mkdtemp(prefix="menuboard_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_test_dir}/test.db"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests
os.environ["SEED_ON_STARTUP"] = "true"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from menuboard.database import Base, async_session_factory, engine  # noqa: E402
from menuboard.models import restaurant as _models  # noqa: E402,F401


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_missing(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = None
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    session.add_all = MagicMock()
    return session


@pytest_asyncio.fixture
async def reset_schema():
    """Start every database test from empty tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(reset_schema):
    """A real session; the test decides when to commit."""
    async with async_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def valid_payload():
    return {"name": "Pizza Place", "image": "https://example.com/p.jpg"}


@pytest_asyncio.fixture
async def test_client(reset_schema):
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport does not run the lifespan, so tables come from
    reset_schema and no seed data is present unless a test adds it.
    """
    from menuboard.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
