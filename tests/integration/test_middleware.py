"""Middleware tests: request ID, rate limiting, CORS."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from redis.exceptions import ConnectionError as RedisConnectionError

from finanzwissen.config import get_settings
from finanzwissen.dependencies import get_store
from finanzwissen.main import create_app
from finanzwissen.middleware import rate_limit


class _FakePipeline:
    def __init__(self, redis: "_FakeRedis") -> None:
        self.redis = redis
        self.key: str | None = None

    def incr(self, key: str) -> None:
        self.key = key

    def expire(self, key: str, seconds: int) -> None:
        self.redis.ttls[key] = seconds

    async def execute(self) -> list[object]:
        if self.redis.fail:
            raise RedisConnectionError("connection refused")
        self.redis.counts[self.key] = self.redis.counts.get(self.key, 0) + 1
        return [self.redis.counts[self.key], True]


class _FakeRedis:
    """Counts pipeline INCRs in a dict."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.counts: dict[str, int] = {}
        self.ttls: dict[str, int] = {}

    def pipeline(self) -> _FakePipeline:
        return _FakePipeline(self)


@pytest_asyncio.fixture
async def limited_client(monkeypatch, store) -> AsyncGenerator[tuple[AsyncClient, _FakeRedis], None]:
    """App with a limit of 3 requests per window and a fake Redis behind the limiter."""
    monkeypatch.setenv("FW_RATE_LIMIT_REQUESTS", "3")
    get_settings.cache_clear()
    fake = _FakeRedis()
    monkeypatch.setattr(rate_limit, "get_redis", lambda: fake)

    app = create_app()

    async def _override_store():
        yield store

    app.dependency_overrides[get_store] = _override_store
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac, fake
    get_settings.cache_clear()


@pytest.mark.asyncio
async def test_request_id_generated(client: AsyncClient) -> None:
    """Request ID is auto-generated when not provided."""
    response = await client.get("/health")
    assert len(response.headers["x-request-id"]) == 36  # UUID format


@pytest.mark.asyncio
async def test_request_id_preserved(client: AsyncClient) -> None:
    """Custom request ID is echoed back in response."""
    response = await client.get("/health", headers={"X-Request-Id": "test-abc-123"})
    assert response.headers["x-request-id"] == "test-abc-123"


@pytest.mark.asyncio
async def test_no_rate_limit_without_redis(client: AsyncClient) -> None:
    """Without Redis every request passes and no limit headers are set."""
    for _ in range(5):
        response = await client.get("/version")
        assert response.status_code == 200
    assert "x-ratelimit-limit" not in response.headers


@pytest.mark.asyncio
async def test_rate_limit_headers(limited_client) -> None:
    client, _ = limited_client
    response = await client.get("/version")
    assert response.headers["x-ratelimit-limit"] == "3"
    assert response.headers["x-ratelimit-remaining"] == "2"


@pytest.mark.asyncio
async def test_rate_limit_blocks_excess(limited_client) -> None:
    """4th request in the window returns 429 with Retry-After."""
    client, _ = limited_client
    for _ in range(3):
        assert (await client.get("/version")).status_code == 200
    response = await client.get("/version")
    assert response.status_code == 429
    assert "retry-after" in response.headers
    assert response.json()["detail"] == "Rate limit exceeded. Try again later."


@pytest.mark.asyncio
async def test_health_exempt_from_rate_limit(limited_client) -> None:
    client, fake = limited_client
    for _ in range(10):
        assert (await client.get("/health")).status_code == 200
    assert fake.counts == {}


@pytest.mark.asyncio
async def test_redis_errors_pass_through(limited_client) -> None:
    """An unreachable Redis does not block requests."""
    client, fake = limited_client
    fake.fail = True
    for _ in range(5):
        response = await client.get("/version")
        assert response.status_code == 200
    assert "x-ratelimit-limit" not in response.headers


@pytest.mark.asyncio
async def test_cors_preflight(client: AsyncClient) -> None:
    response = await client.options(
        "/api/v1/courses",
        headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "GET"},
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:5173"


@pytest.mark.asyncio
async def test_not_found_route_is_json(client: AsyncClient) -> None:
    response = await client.get("/api/v1/nope")
    assert response.status_code == 404
    assert response.json() == {"detail": "Not Found"}
