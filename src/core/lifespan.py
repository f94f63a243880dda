import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core import settings
from core.database import (
    close_database_connection,
    create_database_engine,
    create_session_factory,
    create_tables,
)
from core.exceptions import AppException
from ingestion.exceptions import IngestionError
from ingestion.loader import load_swift_banks_from_file
from ingestion.parser import ValidationPolicy
from services import SwiftService

logger = logging.getLogger(__name__)


async def load_initial_data(sessionmaker: async_sessionmaker[AsyncSession]) -> None:
    """
    Load the configured SWIFT codes file into the store.

    Failures are logged and startup continues; rows committed before a
    failure stay in place and a later run skips them.
    """
    path = settings.data_swift_codes_file
    if not settings.data_auto_load or not path:
        logger.info("SWIFT codes auto-load disabled")
        return

    async with sessionmaker() as session:
        service = SwiftService(session)
        try:
            report = await load_swift_banks_from_file(
                path, service, ValidationPolicy(settings.ingestion_policy)
            )
        except (IngestionError, AppException) as exc:
            logger.error(f"SWIFT codes auto-load from {path} failed: {exc}")
            return

    logger.info(
        f"SWIFT codes auto-load complete: {report.inserted} inserted, "
        f"{report.skipped} already present, {report.rejected} rejected"
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Startup: engine, tables, session factory, optional CSV load.
    Shutdown: dispose the engine.
    """
    logger.info(f"Starting {settings.app_name} {settings.version} ({settings.environment})")

    engine = create_database_engine()
    await create_tables(engine)

    app.state.sessionmaker = create_session_factory(engine)
    await load_initial_data(app.state.sessionmaker)

    yield

    logger.info(f"Stopping {settings.app_name}")
    await close_database_connection(engine)
    app.state.sessionmaker = None
