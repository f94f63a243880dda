"""
Exception handlers registered on the FastAPI application.

Every error leaves the service in one envelope:

    {"error": {"code", "message", "details"}, "meta": {"request_id"}}
"""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.config import settings
from core.exceptions import AppException
from ingestion.exceptions import IngestionError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please contact support."


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: Any,
) -> JSONResponse:
    body = {
        "error": {"code": code, "message": message, "details": details},
        "meta": {"request_id": _request_id(request)},
    }
    return JSONResponse(status_code=status_code, content=body)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render an AppException with its own status; 5xx are logged at ERROR."""
    level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(
        level,
        f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}",
    )
    error = exc.to_dict()["error"]
    return _error_response(
        request, exc.status_code, error["code"], error["message"], error["details"]
    )


async def ingestion_exception_handler(request: Request, exc: IngestionError) -> JSONResponse:
    """Source data problems are the caller's fault: 400."""
    kind = type(exc).__name__
    logger.warning(f"Rejected source data ({kind}): {exc}")
    return _error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "INGESTION_ERROR",
        str(exc),
        {"type": kind},
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Flatten pydantic errors into field/message/type entries."""
    problems = []
    for error in exc.errors():
        problems.append(
            {
                "field": ".".join(map(str, error["loc"])),
                "message": error["msg"],
                "type": error["type"],
            }
        )
    logger.warning(f"Request body rejected on {request.url.path}: {len(problems)} problem(s)")
    return _error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        "Request validation failed",
        problems,
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Internal messages reach the client only in debug mode.
    logger.error(f"Unhandled {type(exc).__name__} on {request.url.path}", exc_info=exc)
    message = str(exc) if settings.debug else GENERIC_ERROR_MESSAGE
    return _error_response(
        request, status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR", message, {}
    )
