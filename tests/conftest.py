"""Shared test fixtures."""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Tests always run against the in-memory backend without Redis
os.environ["FW_STORAGE_BACKEND"] = "memory"
os.environ.pop("FW_REDIS_URL", None)

from finanzwissen.config import get_settings  # noqa: E402
from finanzwissen.db import models  # noqa: E402, F401
from finanzwissen.db.base import Base  # noqa: E402
from finanzwissen.dependencies import get_store  # noqa: E402
from finanzwissen.gamification.seed import seed_defaults  # noqa: E402
from finanzwissen.main import create_app  # noqa: E402
from finanzwissen.store import MemoryStore, SqlStore  # noqa: E402

get_settings.cache_clear()

TEST_PASSWORD = "geheim123"


@pytest_asyncio.fixture
async def store() -> MemoryStore:
    """Fresh in-memory store with the default badges, challenges and courses."""
    store = MemoryStore()
    await seed_defaults(store)
    return store


@pytest_asyncio.fixture
async def client(store: MemoryStore) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP test client bound to the ``store`` fixture."""
    app = create_app()

    async def _override_store() -> AsyncGenerator[MemoryStore, None]:
        yield store

    app.dependency_overrides[get_store] = _override_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def register(client: AsyncClient, username: str = "anna", password: str = TEST_PASSWORD) -> dict:
    """Register a user via the API and return the token response body."""
    response = await client.post("/api/v1/auth/register", json={"username": username, "password": password})
    assert response.status_code == 201, response.text
    return response.json()


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def auth_client(client: AsyncClient) -> AsyncClient:
    """Client carrying a bearer token for the freshly registered user ``anna``."""
    body = await register(client)
    client.headers.update(auth_headers(body["access_token"]))
    return client


@pytest_asyncio.fixture
async def sql_store() -> AsyncGenerator[SqlStore, None]:
    """SqlStore over an in-memory SQLite database with the full schema."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield SqlStore(session)
    await engine.dispose()
