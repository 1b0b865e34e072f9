"""
Tests for the key-value store repositories.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from booking_gateway.protocols import KeyValueStore
from booking_gateway.repositories import InMemoryKeyValueRepository, RedisKeyValueRepository


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory_store(clock):
    return InMemoryKeyValueRepository(clock=clock)


def test_repositories_satisfy_protocol():
    assert isinstance(InMemoryKeyValueRepository(), KeyValueStore)
    assert isinstance(RedisKeyValueRepository(redis_client=MagicMock()), KeyValueStore)


@pytest.mark.asyncio
async def test_memory_setex_and_expiry(memory_store, clock):
    await memory_store.setex("query:hotel:1", 10, '{"id": "1"}')
    assert await memory_store.get("query:hotel:1") == '{"id": "1"}'

    clock.now = 9.9
    assert await memory_store.get("query:hotel:1") is not None

    clock.now = 10
    assert await memory_store.get("query:hotel:1") is None
    assert len(memory_store) == 0


@pytest.mark.asyncio
async def test_memory_keys_match_glob(memory_store):
    await memory_store.setex("query:hotels:1:10", 60, "[]")
    await memory_store.setex("query:hotel:123456", 60, "{}")
    await memory_store.setex("cache:/api/v1/booking/v1/locations", 60, "{}")

    assert sorted(await memory_store.keys("query:*")) == ["query:hotel:123456", "query:hotels:1:10"]
    assert await memory_store.keys("cache:*locations") == ["cache:/api/v1/booking/v1/locations"]


@pytest.mark.asyncio
async def test_memory_delete_counts_live_keys(memory_store, clock):
    await memory_store.setex("a", 5, "1")
    await memory_store.setex("b", 50, "2")
    clock.now = 6

    assert await memory_store.delete("a", "b", "missing") == 1
    assert await memory_store.delete() == 0


@pytest.mark.asyncio
async def test_memory_rejects_non_positive_ttl(memory_store):
    with pytest.raises(ValueError):
        await memory_store.setex("k", 0, "v")


@pytest.fixture
def redis_client():
    client = MagicMock()
    client.get = AsyncMock(return_value=None)
    client.setex = AsyncMock()
    client.delete = AsyncMock(return_value=2)
    client.ping = AsyncMock(return_value=True)
    client.aclose = AsyncMock()
    return client


@pytest.mark.asyncio
async def test_redis_get_decodes_bytes(redis_client):
    redis_client.get.return_value = b'{"id": "123456"}'
    repo = RedisKeyValueRepository(redis_client=redis_client)

    assert await repo.get("query:hotel:123456") == '{"id": "123456"}'
    redis_client.get.assert_awaited_once_with("query:hotel:123456")


@pytest.mark.asyncio
async def test_redis_setex_passes_ttl(redis_client):
    repo = RedisKeyValueRepository(redis_client=redis_client)

    await repo.setex("query:hotels", 300, "[]")

    redis_client.setex.assert_awaited_once_with("query:hotels", 300, "[]")


@pytest.mark.asyncio
async def test_redis_keys_uses_scan(redis_client):
    async def scan_iter(match):
        for key in (b"cache:/a", "cache:/b"):
            yield key

    redis_client.scan_iter = MagicMock(side_effect=scan_iter)
    repo = RedisKeyValueRepository(redis_client=redis_client)

    assert await repo.keys("cache:*") == ["cache:/a", "cache:/b"]
    redis_client.scan_iter.assert_called_once_with(match="cache:*")


@pytest.mark.asyncio
async def test_redis_delete(redis_client):
    repo = RedisKeyValueRepository(redis_client=redis_client)

    assert await repo.delete() == 0
    redis_client.delete.assert_not_awaited()
    assert await repo.delete("a", "b") == 2


@pytest.mark.asyncio
async def test_redis_ping_swallows_connection_errors(redis_client):
    repo = RedisKeyValueRepository(redis_client=redis_client)
    assert await repo.ping() is True

    redis_client.ping.side_effect = ConnectionError("refused")
    assert await repo.ping() is False


@pytest.mark.asyncio
async def test_redis_close(redis_client):
    repo = RedisKeyValueRepository(redis_client=redis_client)

    await repo.close()

    redis_client.aclose.assert_awaited_once()


@pytest.mark.asyncio
async def test_memory_periodic_sweep_drops_unread_expired_keys(clock):
    store = InMemoryKeyValueRepository(clock=clock, sweep_every=3)
    await store.setex("query:hotels:1:10", 1, "[]")
    await store.setex("query:hotels:2:10", 1, "[]")

    clock.now = 5
    await store.setex("query:hotels:3:10", 60, "[]")

    assert list(store._entries) == ["query:hotels:3:10"]
    assert store.sweep() == 0
