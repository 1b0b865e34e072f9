"""In-process implementation of KeyValueStore.

Keeps entries in a dictionary together with their expiry instant. Used
when ``CACHE_BACKEND=memory`` (local development without Redis) and in
tests, where the clock can be replaced to simulate TTL expiry.
"""

import fnmatch
import time
from collections.abc import Callable

SWEEP_EVERY = 256


class InMemoryKeyValueRepository:
    """Dictionary-backed key-value store with per-entry expiry.

    This class satisfies the KeyValueStore protocol. Expired entries are
    dropped when they are read or listed, and every ``sweep_every`` writes
    the whole dictionary is swept so keys that are never read again do not
    accumulate.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic, sweep_every: int = SWEEP_EVERY) -> None:
        """Initialize the store.

        Args:
            clock: Returns the current time in seconds.
            sweep_every: Number of writes between full expiry sweeps.
        """
        self._clock = clock
        self._sweep_every = max(1, sweep_every)
        self._writes = 0
        self._entries: dict[str, tuple[str, float]] = {}

    def _alive(self, key: str) -> bool:
        entry = self._entries.get(key)
        if entry is None:
            return False
        if entry[1] <= self._clock():
            del self._entries[key]
            return False
        return True

    def sweep(self) -> int:
        """Drop every expired entry and return how many were removed."""
        now = self._clock()
        expired = [key for key, (_, expires_at) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]
        return len(expired)

    async def get(self, key: str) -> str | None:
        if not self._alive(key):
            return None
        return self._entries[key][0]

    async def setex(self, key: str, ttl: int, value: str) -> None:
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        self._writes += 1
        if self._writes % self._sweep_every == 0:
            self.sweep()
        self._entries[key] = (value, self._clock() + ttl)

    async def delete(self, *keys: str) -> int:
        deleted = 0
        for key in keys:
            if self._alive(key):
                del self._entries[key]
                deleted += 1
        return deleted

    async def keys(self, pattern: str) -> list[str]:
        return [key for key in list(self._entries) if self._alive(key) and fnmatch.fnmatchcase(key, pattern)]

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return sum(1 for key in list(self._entries) if self._alive(key))
