"""
Async engine, sessions and table bootstrap.

The lifespan handler owns the engine: it creates it, ensures the SWIFT table
exists, stores a session factory in app.state.sessionmaker and disposes the
engine on shutdown. Request handlers get sessions through get_db.
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import settings
from models.base import Base

logger = logging.getLogger(__name__)


def _pool_options() -> dict:
    return {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": settings.db_pool_pre_ping,
        "pool_recycle": settings.db_pool_recycle,
        "pool_timeout": settings.db_pool_timeout,
    }


def create_database_engine(database_url: str | None = None) -> AsyncEngine:
    """
    Build the async engine for database_url (settings.database_url if None).

    Server backends get a sized connection pool from settings. SQLite keeps
    its driver's own pool, which rejects sizing arguments.
    """
    url = make_url(database_url or settings.database_url_str)
    options = {} if url.get_backend_name() == "sqlite" else _pool_options()

    engine = create_async_engine(url, echo=settings.debug, **options)
    logger.info(f"Database engine ready for {engine.dialect.name}")
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Entities are built from rows after commit, so attributes must not expire.
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


async def create_tables(engine: AsyncEngine) -> None:
    """Create missing tables. Existing tables are left as they are."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"Tables present: {', '.join(sorted(Base.metadata.tables))}")


async def check_database_connection(
    sessionmaker: async_sessionmaker[AsyncSession],
) -> bool:
    """True if SELECT 1 succeeds on a fresh session."""
    try:
        async with sessionmaker() as session:
            await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as exc:
        logger.error(f"Database unreachable: {exc}")
        return False
    return True


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request, closed afterwards."""
    async with request.app.state.sessionmaker() as session:
        yield session


async def close_database_connection(engine: AsyncEngine) -> None:
    """Dispose the pool on shutdown; failures are logged, not raised."""
    try:
        await engine.dispose()
    except (SQLAlchemyError, OSError) as exc:
        logger.error(f"Engine disposal failed: {exc}")
        return
    logger.info("Database engine disposed")
