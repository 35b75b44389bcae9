"""
Village Backend — Database Session Management
===============================================

What:  Async SQLAlchemy engine, session factory, schema bootstrap and the
       FastAPI session dependency.
How:   Creates an async engine with connection pooling and bounded statement
       timeouts, provides a session dependency that commits on success and
       rolls back on error.
Who:   Used by route handlers via FastAPI's dependency injection system, by
       the sequence generator (own short transactions) and by Alembic.
When:  Engine is created at module import; sessions are created per-request.

Connection Pooling Strategy (PostgreSQL):
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:     Validates connections before use
    pool_timeout:      Bounded wait for a free connection
    command_timeout:   asyncpg aborts any statement running longer than this

SQLite (tests, local development) gets its own pool class from SQLAlchemy,
so only the busy timeout is forwarded.
"""

import logging
from typing import AsyncGenerator

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from village_api.config import settings

logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> AsyncEngine:
    """
    Create an async engine with pool and timeout settings for the URL's dialect.

    Args:
        database_url: SQLAlchemy async URL (postgresql+asyncpg://, sqlite+aiosqlite://)

    Returns:
        AsyncEngine ready for use by a session factory.
    """
    echo = settings.log_level == "DEBUG"

    if database_url.startswith("sqlite"):
        return create_async_engine(
            database_url,
            echo=echo,
            connect_args={"timeout": settings.db_command_timeout},
        )

    return create_async_engine(
        database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=3600,
        echo=echo,
        connect_args={"command_timeout": settings.db_command_timeout},
    )


# ── Engine & Session Factory ──────────────────────────────────────────────
engine = build_engine(settings.database_url)

# expire_on_commit=False: ORM objects stay readable after the request commits
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class so they share one metadata object,
    which Alembic and `init_db()` use for schema management.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back the transaction and re-raises
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/announcements")
        async def list_announcements(db: AsyncSession = Depends(get_db_session)):
            return await announcement_service.list_announcements(db)
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def init_db(target: AsyncEngine = None) -> None:
    """
    Create every table and seed one counter row per known sequence.

    What:  Schema bootstrap for tests and `DB_AUTO_CREATE=true` deployments.
    How:   `metadata.create_all` followed by inserting missing counters at 0.
           Existing counters are left untouched, so the call is idempotent.
    """
    # Registers every model with Base.metadata
    import village_api.models  # noqa: F401
    from village_api.models.counter import KNOWN_SEQUENCES, Counter

    target = target or engine
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

        existing = set(
            (await conn.execute(select(Counter.name))).scalars().all()
        )
        missing = [name for name in KNOWN_SEQUENCES if name not in existing]
        if missing:
            await conn.execute(
                insert(Counter),
                [{"name": name, "sequence_value": 0} for name in missing],
            )
            logger.info("Seeded counters: %s", ", ".join(missing))


async def dispose_engine() -> None:
    """Gracefully closes all connections in the pool (called on shutdown)."""
    await engine.dispose()
