"""Service layer for business logic.

This layer contains the core cache and proxy logic. Services depend on
protocols (interfaces), not concrete implementations, making them
testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from booking_gateway.services import CacheService, FallbackResolver, UpstreamProxy

    cache = CacheService.create(store=store)
    proxy = UpstreamProxy.create(client=client, resolver=FallbackResolver(catalog))
    ```
"""

from .cache_service import CacheService
from .fallback_service import FallbackResolver
from .hotel_service import HotelService
from .proxy_service import UpstreamProxy

__all__ = [
    "CacheService",
    "FallbackResolver",
    "HotelService",
    "UpstreamProxy",
]
