"""Tests for request id and access logging middleware."""

import logging

import pytest_asyncio
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient

from core.logging import correlation_id_var
from core.middleware import (
    REQUEST_ID_HEADER,
    RESPONSE_TIME_HEADER,
    RequestIDMiddleware,
    RequestLoggingMiddleware,
)


@pytest_asyncio.fixture
async def client():
    app = FastAPI()
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/echo")
    async def echo(request: Request):
        return {"state": request.state.request_id, "context": correlation_id_var.get()}

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


class TestRequestIDMiddleware:
    async def test_incoming_id_is_reused(self, client):
        response = await client.get("/echo", headers={REQUEST_ID_HEADER: "trace-99"})

        assert response.headers[REQUEST_ID_HEADER] == "trace-99"
        assert response.json() == {"state": "trace-99", "context": "trace-99"}

    async def test_id_is_generated_when_absent(self, client):
        first = await client.get("/echo")
        second = await client.get("/echo")

        generated = first.headers[REQUEST_ID_HEADER]
        assert generated
        assert first.json()["context"] == generated
        assert second.headers[REQUEST_ID_HEADER] != generated

    async def test_context_is_cleared_after_request(self, client):
        await client.get("/echo", headers={REQUEST_ID_HEADER: "trace-1"})

        assert correlation_id_var.get() is None


class TestRequestLoggingMiddleware:
    async def test_response_time_header(self, client):
        response = await client.get("/echo")

        assert response.headers[RESPONSE_TIME_HEADER].endswith("s")

    async def test_access_line_logged(self, client, caplog, monkeypatch):
        monkeypatch.setattr(logging.getLogger("core"), "propagate", True)

        with caplog.at_level(logging.INFO, logger="core.middleware"):
            await client.get("/echo")

        assert any("GET /echo -> 200" in r.getMessage() for r in caplog.records)

    async def test_client_errors_logged_as_warning(self, client, caplog, monkeypatch):
        monkeypatch.setattr(logging.getLogger("core"), "propagate", True)

        with caplog.at_level(logging.INFO, logger="core.middleware"):
            await client.get("/nowhere")

        record = next(r for r in caplog.records if "/nowhere" in r.getMessage())
        assert record.levelno == logging.WARNING
