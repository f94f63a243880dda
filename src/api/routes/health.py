"""
Health check endpoints.

- GET /health - Liveness: the process is up
- GET /health/ready - Readiness: the store answers and how many codes it holds
"""

import logging
from typing import Any

from fastapi import APIRouter, Request
from sqlalchemy.exc import SQLAlchemyError

from core.config import settings
from core.database import check_database_connection
from repositories import SwiftBankRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check() -> dict[str, str]:
    """Liveness probe with basic application information."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.version,
        "environment": settings.environment,
    }


@router.get("/ready")
async def readiness_check(request: Request) -> dict[str, Any]:
    """
    Readiness probe.

    Reports "degraded" when the database does not answer. swift_codes is
    the number of stored codes, or None when it could not be counted, so an
    empty table after a failed auto-load is visible to operators.
    """
    sessionmaker = request.app.state.sessionmaker
    db_healthy = await check_database_connection(sessionmaker)

    swift_codes = None
    if db_healthy:
        async with sessionmaker() as session:
            try:
                swift_codes = await SwiftBankRepository(session).count()
            except SQLAlchemyError as e:
                logger.warning(f"Could not count SWIFT codes: {e}")

    return {
        "status": "ready" if db_healthy else "degraded",
        "app": settings.app_name,
        "version": settings.version,
        "checks": {
            "database": "ok" if db_healthy else "ko",
        },
        "swift_codes": swift_codes,
    }
