"""Repository layer for data access.

This layer abstracts external dependencies (Redis, the hotel data store)
behind protocol-based interfaces. This enables:
- Easy swapping of implementations (Redis → in-memory, catalog → database)
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from booking_gateway.protocols import HotelSource, KeyValueStore

from .catalog_hotel_source import CatalogHotelSource
from .memory_repository import InMemoryKeyValueRepository
from .redis_repository import RedisKeyValueRepository

__all__ = [
    "HotelSource",
    "KeyValueStore",
    "CatalogHotelSource",
    "InMemoryKeyValueRepository",
    "RedisKeyValueRepository",
]
