"""Optional PostgreSQL connection used for request metrics.

When the database cannot be reached at startup the service keeps running;
``get_session`` then yields ``None`` and callers skip the write.
"""

from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.config import settings

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


async def init_db(url: str = settings.DATABASE_URL) -> bool:
    """Create the engine and the ``request_logs`` table.

    Returns ``True`` when the database is usable.
    """
    global _engine, _session_factory

    from app.models.db_models import Base

    try:
        _engine = create_async_engine(url, echo=False, pool_pre_ping=True)
        async with _engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except Exception as exc:
        logger.warning("Database unavailable, request metrics will not be stored: %s", exc)
        if _engine is not None:
            await _engine.dispose()
        _engine = None
        _session_factory = None
        return False

    _session_factory = async_sessionmaker(bind=_engine, expire_on_commit=False)
    logger.info("Database connection established.")
    return True


async def close_db() -> None:
    """Dispose of the connection pool."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
        logger.info("Database connection pool closed.")
    _engine = None
    _session_factory = None


def is_db_available() -> bool:
    return _session_factory is not None


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession | None, None]:
    """Yield a session committing on success, or ``None`` without a database."""
    if _session_factory is None:
        yield None
        return

    session = _session_factory()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()
