"""
Village Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets a fresh SQLite file (through aiosqlite) with all tables
       created and the counters seeded, exactly as `init_db()` does in a
       deployment. The FastAPI app is exercised through HTTPX's ASGITransport
       with its session and sequence-generator dependencies overridden.

Fixture Hierarchy (all function-scoped):
    ├── db_engine:        AsyncEngine on a temp SQLite file, schema + counters
    ├── session_factory:  async_sessionmaker bound to db_engine
    ├── db_session:       one AsyncSession for service-level tests
    ├── sequences:        SequenceGenerator using session_factory
    ├── test_client:      HTTPX AsyncClient wired to the app
    └── mock_db_session:  AsyncMock session for failure-path tests
"""

import os
import tempfile

# Settings are read at import time; configure them before any app import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="village_test_"), "health.db"
)
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["PASSWORD_HASH_ROUNDS"] = "1000"
os.environ["DB_AUTO_CREATE"] = "false"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from village_api.database import build_engine, get_db_session, init_db
from village_api.services.sequence_service import SequenceGenerator, get_sequence_generator


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """Fresh database file with every table and seeded counters."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'village.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """
    A session for calling services directly.

    Tests commit after each write: the sequence generator uses its own
    connection, and SQLite allows one writer at a time.
    """
    async with session_factory() as session:
        yield session


@pytest.fixture
def sequences(session_factory):
    return SequenceGenerator(session_factory)


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory, sequences):
    """
    HTTPX AsyncClient talking to the app in-process.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from village_api.main import app

    async def override_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_sequence_generator] = lambda: sequences

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# ══════════════════════════════════════════════════════════════════════════
# Mocks
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    A MagicMock that simulates AsyncSession behavior.

    Usage:
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception())
        with pytest.raises(DatabaseError):
            await user_service.list_active_users(mock_db_session)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def crop_payload():
    return {"crop_name": "Rice", "avg_price": 40}
