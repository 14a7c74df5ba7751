"""
Database Connection Management

One async SQLAlchemy engine per process, created by ``init_database`` and
disposed by ``close_database``. The reporting layer only reads, but sessions
still commit on success so the seeding script can share them.
"""

import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from gold_analytics.config import get_settings

logger = structlog.get_logger(__name__)

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None

NOT_INITIALIZED = "Database not initialized. Call init_database() first."


async def _ping(engine: AsyncEngine) -> None:
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def init_database(url: Optional[str] = None) -> AsyncEngine:
    """
    Create the process-wide engine and check that the database answers.

    Args:
        url: Async SQLAlchemy URL, defaults to the configured database

    Raises:
        Whatever the driver raises when the database cannot be reached; the
        engine is disposed first.
    """
    global _engine, _session_factory

    if _engine is not None:
        logger.warning("Database already initialized", url=_engine.url.render_as_string())
        return _engine

    settings = get_settings()
    engine = create_async_engine(
        url or settings.database.async_url,
        echo=settings.database.echo,
        pool_pre_ping=True,
        poolclass=NullPool,
    )

    try:
        await _ping(engine)
    except Exception as e:
        logger.error("Failed to connect to database", url=engine.url.render_as_string(), error=str(e))
        await engine.dispose()
        raise

    _engine = engine
    _session_factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    logger.info("Database connection established", url=engine.url.render_as_string())
    return engine


async def close_database() -> None:
    """Dispose of the engine; safe to call when nothing was initialized"""
    global _engine, _session_factory

    if _engine is None:
        return

    await _engine.dispose()
    _engine = None
    _session_factory = None
    logger.info("Database engine disposed")


def get_engine() -> AsyncEngine:
    """
    Get the process-wide engine.

    Raises:
        RuntimeError: If database is not initialized
    """
    if _engine is None:
        raise RuntimeError(NOT_INITIALIZED)
    return _engine


@asynccontextmanager
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Session scope: commit on success, roll back and re-raise on error.

    Example:
        async with get_db() as db:
            result = await db.execute(query)
    """
    if _session_factory is None:
        raise RuntimeError(NOT_INITIALIZED)

    async with _session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            logger.error("Database session error, rolling back", error=str(e), error_type=type(e).__name__)
            await session.rollback()
            raise


async def check_database_health() -> Dict[str, Any]:
    """Round-trip latency, or the error when the database is unavailable"""
    start = time.perf_counter()
    try:
        await _ping(get_engine())
    except Exception as e:
        return {"status": "unhealthy", "error": str(e)}

    return {
        "status": "healthy",
        "latency_ms": round((time.perf_counter() - start) * 1000, 2),
    }
