"""
Album Catalog: Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the test suite.
How:   Environment variables are set at the top of this module, before any
       album_catalog import, so the settings singleton and the engine are
       built against a throwaway SQLite file.

Fixtures:
    ├── mock_db_session: AsyncMock session (no real DB needed)
    ├── memory: fresh, seeded MemoryAlbumStore
    ├── db_tables: empty `albums` table in the test database
    ├── db_session: real AsyncSession on the test database
    └── test_client: HTTPX AsyncClient wired to the FastAPI app
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

_test_dir = tempfile.mkdtemp(prefix="album_catalog_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_test_dir}/test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["PRETTY_JSON"] = "true"
os.environ.pop("listenPort", None)
os.environ.pop("LISTEN_PORT", None)


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
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
    session.add = MagicMock()
    session.add_all = MagicMock()
    return session


@pytest.fixture
def memory():
    """A fresh memory store holding the four sample albums."""
    from album_catalog.services.memory_store import MemoryAlbumStore

    return MemoryAlbumStore(seed=True)


@pytest_asyncio.fixture
async def db_tables():
    """Recreate the albums table so every test starts with no rows."""
    from album_catalog.database import dispose_engine, drop_models, init_models

    await drop_models()
    await init_models()
    yield
    await dispose_engine()


@pytest_asyncio.fixture
async def db_session(db_tables):
    """A real session on the test database, committed by the test itself."""
    from album_catalog.database import async_session_factory

    async with async_session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_client(db_tables):
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport does not run the lifespan handler, so the fixture does
    its startup work: empty tables (db_tables) and a freshly seeded
    memory store.
    """
    from album_catalog.main import app
    from album_catalog.services.memory_store import memory_store

    memory_store.reset(seed=True)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
