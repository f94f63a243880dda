"""
HTTP middleware: request ids and access logging.

RequestIDMiddleware must wrap RequestLoggingMiddleware so the access log
line already knows the request id.
"""

import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from core.logging import correlation_id_var

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
RESPONSE_TIME_HEADER = "X-Response-Time"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Tag each request with an id.

    A caller-supplied X-Request-ID is kept, otherwise a uuid4 is minted. The
    id lands in request.state, in every log record emitted while the request
    runs, and in the response headers.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        token = correlation_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            correlation_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One access log line per request, levelled by status class."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        client = request.client.host if request.client else "-"
        target = f"{request.method} {request.url.path}"

        try:
            response = await call_next(request)
        except Exception:
            elapsed = time.perf_counter() - started
            logger.exception(f"{target} raised after {elapsed:.3f}s (client={client})")
            raise

        elapsed = time.perf_counter() - started
        logger.log(
            _level_for(response.status_code),
            f"{target} -> {response.status_code} in {elapsed:.3f}s (client={client})",
        )
        response.headers[RESPONSE_TIME_HEADER] = f"{elapsed:.3f}s"
        return response
