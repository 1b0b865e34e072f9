"""Key-value store protocol.

Defines the interface the cache layer needs from its backing store:
plain string values with a per-key time-to-live.

Implementations can include:
- Redis (default)
- In-process dictionary with expiry (local development, tests)
- Any store offering GET / SETEX / DEL semantics
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Protocol for TTL key-value backends.

    Any type that implements these coroutines satisfies the protocol,
    no explicit inheritance needed.

    Example:
        ```python
        from booking_gateway.protocols import KeyValueStore

        store: KeyValueStore = RedisKeyValueRepository.create()
        store: KeyValueStore = InMemoryKeyValueRepository()
        ```
    """

    async def get(self, key: str) -> str | None:
        """Fetch the value stored under a key.

        Args:
            key: The storage key

        Returns:
            The stored text, or None if absent or expired
        """
        ...

    async def setex(self, key: str, ttl: int, value: str) -> None:
        """Store a value that expires after ``ttl`` seconds.

        Args:
            key: The storage key
            ttl: Time-to-live in seconds
            value: UTF-8 JSON text
        """
        ...

    async def delete(self, *keys: str) -> int:
        """Delete keys.

        Args:
            keys: Storage keys to delete

        Returns:
            Number of keys that existed and were removed
        """
        ...

    async def keys(self, pattern: str) -> list[str]:
        """List keys matching a glob-style pattern.

        Args:
            pattern: Glob pattern, e.g. ``cache:/api/hotels*``

        Returns:
            Matching keys
        """
        ...

    async def ping(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...
