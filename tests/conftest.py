"""
Howl Backend — Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession for service failure paths
    ├── database: Database on a throwaway SQLite file with all tables created
    ├── test_client: HTTPX AsyncClient wired to an app using `database`
    ├── business_body: A complete, valid business request body
    └── seed_businesses: Inserts N businesses directly through the ORM
"""

import os

# Override settings BEFORE any howl imports
# Why: Settings() is instantiated at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["STATIC_ROOT"] = "./nonexistent-static-root"
os.environ.pop("DB_ADMIN_URL", None)

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from howl.database import Database  # noqa: E402
from howl.models.business import Business  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = row
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def database(tmp_path):
    """
    A real Database on a per-test SQLite file.

    Why a file (not :memory:): each pooled connection to :memory: would see
    its own empty database.
    """
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'howl.db'}")
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient talking to a fresh app instance.

    ASGITransport does not run the lifespan, so the test database is
    attached to app.state directly.
    """
    from howl.main import create_app

    app = create_app()
    app.state.database = database
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def business_body():
    """A complete business body; copy and mutate per test."""
    return {
        "ownerid": 1,
        "name": "Block 15",
        "address": "300 SW Jefferson Ave.",
        "city": "Corvallis",
        "state": "OR",
        "zip": "97333",
        "phone": "541-758-2077",
        "category": "Restaurant",
        "subcategory": "Brewpub",
        "website": "http://block15.com",
    }


@pytest.fixture
def seed_businesses(database, business_body):
    """Returns an async helper that inserts `count` businesses named Business 1..N."""

    async def _seed(count: int) -> None:
        async with database.session_factory() as session:
            session.add_all(
                Business(**{**business_body, "name": f"Business {i}"})
                for i in range(1, count + 1)
            )
            await session.commit()

    return _seed
