"""
Pytest configuration and fixtures for SWIFT codes service tests.

This module provides:
- Database setup and teardown (in-memory SQLite, one database per test)
- Test client fixtures
- SWIFT bank entity and CSV fixtures
"""

# Set environment variables BEFORE importing anything from the application
import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DATA_AUTO_LOAD"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from core.database import get_db
from domain import SwiftBankEntity
from main import app
from models.base import Base

CSV_HEADER = (
    "COUNTRY ISO2 CODE,SWIFT CODE,CODE TYPE,NAME,ADDRESS,TOWN NAME,COUNTRY NAME,TIME ZONE"
)


# ============================================================================
# Database Fixtures
# ============================================================================
@pytest_asyncio.fixture
async def test_engine():
    """
    Create a test database engine.

    Every test gets its own in-memory SQLite database; StaticPool keeps the
    single connection alive so all sessions see the same data.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """
    Create a database session for a test.

    Repository and service code commit on their own, so the database itself
    is thrown away after the test instead of rolling back.
    """
    async with session_factory() as session:
        yield session


# ============================================================================
# FastAPI Client Fixtures
# ============================================================================
@pytest_asyncio.fixture
async def async_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    Create an async FastAPI test client bound to the test database.

    ASGITransport does not run the lifespan handler, so the session factory
    is installed on app.state here.
    """

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.state.sessionmaker = session_factory

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
    app.state.sessionmaker = None


# ============================================================================
# Data Fixtures
# ============================================================================
@pytest.fixture
def headquarters() -> SwiftBankEntity:
    return SwiftBankEntity(
        swift_code="ABCDUS33XXX",
        country_iso_code="US",
        bank_name="Chase Bank",
        address="123 Main St",
        country_name="UNITED STATES",
    )


@pytest.fixture
def branch() -> SwiftBankEntity:
    return SwiftBankEntity(
        swift_code="ABCDUS33123",
        country_iso_code="US",
        bank_name="Chase Bank Branch",
        address="456 Side St",
        country_name="UNITED STATES",
    )


@pytest.fixture
def csv_text():
    """Build CSV source text from data lines, prefixed with the standard header."""

    def build(*lines: str, header: str = CSV_HEADER) -> str:
        return "\n".join([header, *lines]) + "\n"

    return build
