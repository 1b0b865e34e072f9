"""
Shared fixtures for the booking gateway tests.

The upstream provider is simulated with httpx.MockTransport and the cache
store with the in-memory repository, so no network or Redis is needed.
"""

from collections.abc import Callable

import httpx
import pytest
from fastapi.testclient import TestClient
from redis.exceptions import ConnectionError as RedisConnectionError

from booking_gateway.api.app import create_app
from booking_gateway.catalog import FallbackCatalog
from booking_gateway.config import Settings
from booking_gateway.repositories import InMemoryKeyValueRepository

PROXY_BASE = "/api/v1/booking"


class FakeUpstream:
    """Stand-in hotel provider that records every request it receives."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            200, json={"success": True, "data": [{"id": "live-1"}]}
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    def block(self) -> None:
        """Answer every request with 451 Unavailable For Legal Reasons."""
        self.responder = lambda request: httpx.Response(451, json={"message": "Unavailable for legal reasons"})

    def fail(self) -> None:
        """Fail every request at the transport level."""

        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        self.responder = refuse

    def timeout(self) -> None:
        """Let every request run past the upstream timeout."""

        def stall(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("Timed out waiting for upstream", request=request)

        self.responder = stall

    def truncate(self, head: bytes) -> None:
        """Answer 200 JSON whose body breaks off after ``head``."""
        self.responder = lambda request: httpx.Response(
            200, headers={"Content-Type": "application/json"}, stream=BrokenStream(head)
        )


class BrokenStream(httpx.AsyncByteStream):
    """Response body that yields one chunk and then loses the connection."""

    def __init__(self, head: bytes) -> None:
        self.head = head

    async def __aiter__(self):
        yield self.head
        raise httpx.ReadError("Connection reset by peer")


class BrokenStore:
    """KeyValueStore whose every call fails as if Redis were down."""

    def __init__(self) -> None:
        self.calls = 0

    async def get(self, key: str) -> str | None:
        self.calls += 1
        raise RedisConnectionError("Connection refused")

    async def setex(self, key: str, ttl: int, value: str) -> None:
        self.calls += 1
        raise RedisConnectionError("Connection refused")

    async def delete(self, *keys: str) -> int:
        raise RedisConnectionError("Connection refused")

    async def keys(self, pattern: str) -> list[str]:
        raise RedisConnectionError("Connection refused")

    async def ping(self) -> bool:
        raise RedisConnectionError("Connection refused")


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the process environment."""
    return Settings(
        cache_backend="memory",
        cache_query_ttl=300,
        response_cache_ttl=60,
        response_cache_paths=(PROXY_BASE,),
        upstream_base_url="https://upstream.test",
        upstream_host="upstream.test",
        rapidapi_key="test-key-1234",
        proxy_base_path=PROXY_BASE,
        upstream_timeout=5.0,
        fallback_data_dir=None,
        log_level="WARNING",
        log_file=None,
    )


@pytest.fixture
def catalog() -> FallbackCatalog:
    return FallbackCatalog.default()


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def store() -> InMemoryKeyValueRepository:
    return InMemoryKeyValueRepository()


@pytest.fixture
def make_client(settings, catalog, upstream):
    """Build a TestClient around an app wired to the fake upstream."""

    def _make(store=None, config: Settings | None = None) -> TestClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
        app = create_app(
            config=config or settings,
            store=store if store is not None else InMemoryKeyValueRepository(),
            catalog=catalog,
            http_client=http_client,
        )
        return TestClient(app)

    return _make


@pytest.fixture
def client(make_client, store):
    """TestClient with the lifespan running and the shared in-memory store."""
    with make_client(store=store) as test_client:
        yield test_client
