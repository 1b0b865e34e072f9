"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Redis → in-memory, catalog → database)
- Unit testing with fake implementations
- Clear separation of concerns

Usage:
    ```python
    from booking_gateway.protocols import KeyValueStore, HotelSource

    store: KeyValueStore = RedisKeyValueRepository.create()
    source: HotelSource = CatalogHotelSource(catalog)
    ```
"""

from .hotel_source import HotelSource
from .key_value_store import KeyValueStore

__all__ = [
    "HotelSource",
    "KeyValueStore",
]
