"""
Logging setup for the SWIFT codes service.

Records always go to stdout, either as readable lines or as JSON documents
(python-json-logger) depending on LOG_FORMAT. With LOG_FILE_ENABLED the same
records are also written to a rotating file, and ERROR and above to a
separate error.log next to it.

Each record carries a correlation_id: the request id while an HTTP request
is being served, "no-request-id" otherwise (startup, bulk loads).
"""

import logging
import logging.config
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import Any

from core.config import settings

correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)

APPLICATION_LOGGERS = ("api", "core", "ingestion", "repositories", "services")

NO_REQUEST_ID = "no-request-id"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s [%(correlation_id)s] %(message)s"
_JSON_FIELDS = "%(asctime)s %(levelname)s %(name)s %(correlation_id)s %(funcName)s %(message)s"


class CorrelationIdFilter(logging.Filter):
    """Stamp records with the current request id."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = correlation_id_var.get() or NO_REQUEST_ID
        return True


def _rotating_handler(filename: str, level: str, formatter: str) -> dict[str, Any]:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "level": level,
        "formatter": formatter,
        "filename": filename,
        "maxBytes": settings.log_file_max_bytes,
        "backupCount": settings.log_file_backup_count,
        "encoding": "utf-8",
        "filters": ["correlation_id"],
    }


def _library_logger(level: str) -> dict[str, Any]:
    return {"level": level, "handlers": ["console"], "propagate": False}


def get_logging_config() -> dict[str, Any]:
    """
    Build the dictConfig mapping for the current settings.

    Application loggers do not propagate, so each record is emitted once
    even though root has the same handlers.
    """
    formatter = "json" if settings.log_format == "json" else "text"
    handler_names = ["console"]

    handlers: dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": settings.log_level,
            "formatter": formatter,
            "stream": sys.stdout,
            "filters": ["correlation_id"],
        },
    }
    if settings.log_file_enabled:
        log_file = Path(settings.log_file_path)
        handlers["file"] = _rotating_handler(str(log_file), settings.log_level, formatter)
        handlers["error_file"] = _rotating_handler(
            str(log_file.parent / "error.log"), "ERROR", formatter
        )
        handler_names += ["file", "error_file"]

    loggers: dict[str, Any] = {
        "uvicorn": _library_logger("INFO"),
        "uvicorn.access": _library_logger("INFO"),
        # INFO here echoes every SQL statement
        "sqlalchemy.engine": _library_logger("WARNING"),
    }
    for name in APPLICATION_LOGGERS:
        loggers[name] = {
            "level": settings.log_level,
            "handlers": list(handler_names),
            "propagate": False,
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "text": {"format": _TEXT_FORMAT, "datefmt": _DATE_FORMAT},
            "json": {
                "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
                "format": _JSON_FIELDS,
            },
        },
        "filters": {"correlation_id": {"()": CorrelationIdFilter}},
        "handlers": handlers,
        "loggers": loggers,
        "root": {"level": settings.log_level, "handlers": list(handler_names)},
    }


def setup_logging() -> None:
    """Apply get_logging_config(). Call once, before the first record is logged."""
    if settings.log_file_enabled:
        Path(settings.log_file_path).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(get_logging_config())
    logging.getLogger(__name__).info(
        f"Logging ready (level={settings.log_level}, format={settings.log_format}, "
        f"file={'on' if settings.log_file_enabled else 'off'})"
    )
