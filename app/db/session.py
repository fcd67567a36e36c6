"""
Database session management.

Provides the async SQLAlchemy engine, the per-request session dependency and
the start-up routine that creates tables.
"""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel

from app.core.config import settings
from app.core.resilience import retry_with_backoff

logger = logging.getLogger(__name__)

# ── Engine creation (PostgreSQL or SQLite) ──
if settings.USE_SQLITE:
    # StaticPool makes every connection share the same in-memory database.
    from sqlalchemy.pool import StaticPool

    engine = create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DEBUG,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # aiosqlite wraps a sync connection, so listen on the sync engine.
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

else:
    engine = create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DEBUG,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=True,
    )

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    # Attribute access after commit must not trigger an implicit (sync) lazy load.
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request, closed afterwards."""
    async with AsyncSessionLocal() as session:
        yield session


async def create_tables(bind: AsyncEngine = engine) -> None:
    """Create all registered tables (no-op for tables that already exist)."""
    import app.db.base  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database tables ready")


@retry_with_backoff(
    max_retries=max(settings.DB_CONNECT_RETRIES - 1, 0),
    base_delay=2.0,
    max_delay=30.0,
)
async def init_db() -> None:
    """Create tables at start-up, retrying while the database comes up."""
    logger.info("Connecting to database at start-up")
    await create_tables()
