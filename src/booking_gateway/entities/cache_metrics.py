"""Cache metrics domain entity."""

from dataclasses import dataclass


@dataclass
class CacheMetrics:
    """Track hit/miss counters for cache operations."""

    hits: int = 0
    misses: int = 0
    store_errors: int = 0
    responses_stored: int = 0

    @property
    def total_lookups(self) -> int:
        """Number of lookups that reached a hit or miss decision."""
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        if self.total_lookups == 0:
            return 0.0
        return self.hits / self.total_lookups

    def record_hit(self) -> None:
        """Record a cache hit."""
        self.hits += 1

    def record_miss(self) -> None:
        """Record a cache miss."""
        self.misses += 1

    def record_store_error(self) -> None:
        """Record a failed store read or write."""
        self.store_errors += 1

    def record_response_stored(self) -> None:
        """Record an HTTP response body written to the store."""
        self.responses_stored += 1

    def to_dict(self) -> dict[str, float | int]:
        """Convert metrics to dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": self.hit_rate,
            "store_errors": self.store_errors,
            "responses_stored": self.responses_stored,
        }
