"""Shared fixtures.

Tests run against an in-memory SQLite database. The environment is
configured before the application is imported so that settings pick
it up.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "development"

from collections.abc import AsyncGenerator, Generator
from typing import Any

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from tests.factories import trailer_payload
from trailer_api.catalog.service import CatalogService
from trailer_api.infrastructure.database import Base, build_engine, get_session
from trailer_api.main import app

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def make_engine() -> AsyncEngine:
    """Create an isolated in-memory engine sharing one connection."""
    return build_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


# ============================================================================
# Service Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def session() -> AsyncGenerator[AsyncSession, None]:
    """Create a session on a fresh database."""
    engine = make_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def service(session: AsyncSession) -> CatalogService:
    """Create catalog service bound to the test session."""
    return CatalogService(session)


# ============================================================================
# Client Fixtures
# ============================================================================


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Create test client backed by a fresh in-memory database."""
    engine = make_engine()
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        # Runs on the client's event loop; create_all skips existing tables
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def create_trailer(client: TestClient):
    """Create a trailer through the API and return its data."""

    def _create(**overrides: Any) -> dict[str, Any]:
        response = client.post("/api/trailers", json=trailer_payload(**overrides))
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create
