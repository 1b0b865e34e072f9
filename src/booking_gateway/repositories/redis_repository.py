"""Redis implementation of KeyValueStore.

Values are stored as plain strings with SETEX so Redis expires them on
its own; this repository never tracks expiry itself.
"""

import redis.asyncio as redis

from booking_gateway.config import Settings, get_redis_client


class RedisKeyValueRepository:
    """Redis-backed key-value store.

    This class satisfies the KeyValueStore protocol through structural
    typing - no explicit inheritance needed.

    The client is created with ``decode_responses=True`` so every value
    comes back as ``str``.
    """

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        """Initialize the Redis repository.

        Args:
            redis_client: asyncio Redis client. If None, creates default.
        """
        self._client = redis_client or get_redis_client()

    @classmethod
    def create(cls, config: Settings | None = None) -> "RedisKeyValueRepository":
        """Factory method to create RedisKeyValueRepository from settings.

        Args:
            config: Settings to read the Redis URL from. If None, uses the
                global settings.

        Returns:
            Configured RedisKeyValueRepository
        """
        return cls(redis_client=get_redis_client(config))

    async def get(self, key: str) -> str | None:
        """Fetch the value stored under a key."""
        value = await self._client.get(key)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def setex(self, key: str, ttl: int, value: str) -> None:
        """Store a value with an expiry in seconds."""
        await self._client.setex(key, ttl, value)

    async def delete(self, *keys: str) -> int:
        """Delete keys and return how many existed."""
        if not keys:
            return 0
        result: int = await self._client.delete(*keys)
        return result

    async def keys(self, pattern: str) -> list[str]:
        """List keys matching a glob pattern.

        Uses SCAN rather than KEYS so large keyspaces do not block Redis.
        """
        found = []
        async for key in self._client.scan_iter(match=pattern):
            found.append(key.decode("utf-8") if isinstance(key, bytes) else key)
        return found

    async def ping(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except Exception:
            return False

    async def close(self) -> None:
        """Release the connection pool."""
        await self._client.aclose()

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
