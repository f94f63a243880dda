"""
ASGI entry point: `uvicorn main:app`, or `python src/main.py` for a local run.
"""

import uvicorn
from fastapi import APIRouter, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from api.routes import health, swift_codes
from core import settings
from core.exceptions import AppException
from core.handlers import (
    app_exception_handler,
    general_exception_handler,
    ingestion_exception_handler,
    validation_exception_handler,
)
from core.lifespan import lifespan
from core.logging import setup_logging
from core.middleware import RequestIDMiddleware, RequestLoggingMiddleware
from ingestion.exceptions import IngestionError

setup_logging()


def create_app() -> FastAPI:
    """Build the FastAPI application with handlers, middleware and routes."""
    application = FastAPI(
        title=settings.app_name,
        version=settings.version,
        description=settings.description,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    application.add_exception_handler(AppException, app_exception_handler)
    application.add_exception_handler(IngestionError, ingestion_exception_handler)
    application.add_exception_handler(RequestValidationError, validation_exception_handler)
    application.add_exception_handler(Exception, general_exception_handler)

    # Added last runs first: CORS, then request id, then access logging.
    application.add_middleware(RequestLoggingMiddleware)
    application.add_middleware(RequestIDMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    v1_router = APIRouter(prefix="/v1")
    v1_router.include_router(swift_codes.router)

    application.include_router(health.router)
    application.include_router(v1_router)

    return application


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )
