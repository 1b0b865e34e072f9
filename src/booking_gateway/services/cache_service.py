"""Cache service for read-through caching.

This service owns the get-or-compute contract used by the hotel read
paths and the response-cache middleware. It talks to the backing store
only through the KeyValueStore protocol.
"""

import inspect
import json
from collections.abc import Callable
from typing import Any

from booking_gateway.config import settings
from booking_gateway.entities import CacheEntryEntity, CacheMetrics
from booking_gateway.protocols import KeyValueStore
from booking_gateway.utils import get_logger

logger = get_logger(__name__)

QUERY_PREFIX = "query:"
RESPONSE_PREFIX = "cache:"

Compute = Callable[[], Any]  # may return an Awaitable


class CacheService:
    """Read-through cache orchestration service.

    The store is treated as an optimisation only: when it cannot be read
    or written, every operation degrades to "no cache" instead of failing
    the caller.

    Example:
        ```python
        from booking_gateway.repositories import RedisKeyValueRepository
        from booking_gateway.services import CacheService

        cache = CacheService.create(store=RedisKeyValueRepository.create())

        hotels = await cache.cache_query(
            CacheService.build_key("hotels", page, limit, sort, fields, location),
            300,
            lambda: source.find(page, limit, sort),
        )
        ```
    """

    def __init__(self, store: KeyValueStore, default_ttl: int | None = None) -> None:
        """Initialize the cache service.

        Args:
            store: Key-value backend (required).
            default_ttl: TTL used by callers that do not pass one. Defaults to settings.
        """
        self._store = store
        self._default_ttl = default_ttl or settings.cache_query_ttl
        self._metrics = CacheMetrics()

    @classmethod
    def create(cls, store: KeyValueStore, default_ttl: int | None = None) -> "CacheService":
        """Factory method to create CacheService with sensible defaults.

        Args:
            store: Key-value backend (required).
            default_ttl: Default TTL in seconds. If None, uses settings.

        Returns:
            Configured CacheService instance
        """
        return cls(store=store, default_ttl=default_ttl)

    @staticmethod
    def build_key(resource: str, *parts: Any) -> str:
        """Compose a deterministic cache key from a resource name and query parameters.

        ``None`` parameters become empty segments; every parameter keeps its
        position, so two keys match only if every parameter matches.

        Example:
            ``build_key("hotels", 1, 10, "-rating", None, None)`` gives
            ``"hotels:1:10:-rating::"``
        """
        return ":".join([resource, *("" if part is None else str(part) for part in parts)])

    @staticmethod
    def response_key(path: str, query: str = "") -> str:
        """Build the response-cache key for a request URL."""
        return f"{RESPONSE_PREFIX}{path}?{query}" if query else f"{RESPONSE_PREFIX}{path}"

    async def cache_query(self, key: str, ttl: int | None, compute: Compute) -> Any:
        """Return the cached result for ``key`` or compute and store it.

        Business logic:
        1. Look the key up in the store; a stored value (even JSON null) is a hit
        2. On a miss, run ``compute`` once and store its JSON with the TTL
        3. If the store fails at any point, return the computed value unmemoized

        Errors raised by ``compute`` itself are not caught.

        Args:
            key: Cache key encoding every parameter that affects the result
            ttl: Time-to-live in seconds. If None, uses the default TTL.
            compute: Zero-argument callable returning a JSON-serializable
                value, or an awaitable of one

        Returns:
            The cached or freshly computed value

        Raises:
            ValueError: If the key is empty or the TTL is not positive
        """
        if not key:
            raise ValueError("Cache key must be a non-empty string")
        ttl = self._default_ttl if ttl is None else ttl
        if ttl <= 0:
            raise ValueError("Cache TTL must be a positive number of seconds")

        storage_key = f"{QUERY_PREFIX}{key}"

        try:
            cached = await self._store.get(storage_key)
        except Exception as e:
            logger.warning(f"Cache lookup failed for {storage_key}, computing directly: {e}")
            self._metrics.record_store_error()
            return await self._run(compute)

        if cached is not None:
            try:
                value = json.loads(cached)
            except json.JSONDecodeError as e:
                logger.warning(f"Discarding undecodable cache entry {storage_key}: {e}")
            else:
                logger.debug(f"Cache hit: {storage_key}")
                self._metrics.record_hit()
                return value

        logger.debug(f"Cache miss: {storage_key}")
        self._metrics.record_miss()
        result = await self._run(compute)

        entry = CacheEntryEntity(key=storage_key, value=result, ttl=ttl)
        try:
            await self._store.setex(entry.key, entry.ttl, entry.serialize())
        except Exception as e:
            logger.warning(f"Cache write failed for {storage_key}: {e}")
            self._metrics.record_store_error()

        return result

    @staticmethod
    async def _run(compute: Compute) -> Any:
        result = compute()
        if inspect.isawaitable(result):
            result = await result
        return result

    async def get_response(self, key: str) -> str | None:
        """Fetch a cached response body.

        Args:
            key: Response-cache key from ``response_key``

        Returns:
            The cached JSON text, or None on a miss or store failure
        """
        try:
            cached = await self._store.get(key)
        except Exception as e:
            logger.warning(f"Response cache lookup failed for {key}: {e}")
            self._metrics.record_store_error()
            return None

        if cached is None:
            self._metrics.record_miss()
        else:
            self._metrics.record_hit()
        return cached

    async def store_response(self, key: str, ttl: int, body: str) -> bool:
        """Store a response body.

        Args:
            key: Response-cache key from ``response_key``
            ttl: Time-to-live in seconds
            body: JSON text sent to the client

        Returns:
            True if stored, False if the store failed
        """
        try:
            await self._store.setex(key, ttl, body)
        except Exception as e:
            logger.warning(f"Response cache write failed for {key}: {e}")
            self._metrics.record_store_error()
            return False

        self._metrics.record_response_stored()
        return True

    async def clear(self, pattern: str = "*") -> int:
        """Delete cached queries and responses matching a glob pattern.

        Args:
            pattern: Pattern applied after the ``cache:`` / ``query:`` prefixes

        Returns:
            Number of entries deleted (0 if the store failed)
        """
        try:
            keys: list[str] = []
            for prefix in (RESPONSE_PREFIX, QUERY_PREFIX):
                keys.extend(await self._store.keys(f"{prefix}{pattern}"))
            deleted = await self._store.delete(*keys) if keys else 0
        except Exception as e:
            logger.error(f"Clear cache failed for pattern {pattern!r}: {e}")
            self._metrics.record_store_error()
            return 0

        logger.info(f"Cleared {deleted} cache entries matching {pattern!r}")
        return deleted

    async def is_healthy(self) -> bool:
        """Check if the backing store is reachable."""
        try:
            return await self._store.ping()
        except Exception:
            return False

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with counters and the default TTL
        """
        stats: dict = self._metrics.to_dict()
        stats["default_ttl"] = self._default_ttl
        stats["store"] = type(self._store).__name__
        return stats

    def reset_stats(self) -> None:
        """Reset hit/miss counters."""
        self._metrics = CacheMetrics()

    @property
    def default_ttl(self) -> int:
        """Get the default TTL in seconds."""
        return self._default_ttl

    @property
    def store(self) -> KeyValueStore:
        """Get the underlying store (for testing)."""
        return self._store
