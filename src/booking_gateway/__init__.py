"""Booking Gateway - read-through cache and hotel provider proxy.

This package provides a layered architecture for two cooperating parts:
a get-or-compute cache in front of expensive reads, and a reverse proxy
to the hotel provider that substitutes canned data when the provider is
blocked (HTTP 451) or unreachable.

Layers:
    - protocols: Interface contracts (KeyValueStore, HotelSource)
    - repositories: Data access implementations
    - services: Business logic (cache, fallback, proxy, hotels)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from booking_gateway.repositories import RedisKeyValueRepository
    from booking_gateway.services import CacheService

    cache = CacheService.create(store=RedisKeyValueRepository.create())
    hotel = await cache.cache_query("hotel:123456", 300, load_hotel)
    ```

For HTTP API:
    ```python
    from booking_gateway.api.app import app, create_app
    ```
"""

from booking_gateway.catalog import FallbackCatalog
from booking_gateway.config import get_redis_client, get_settings, settings
from booking_gateway.entities import CacheEntryEntity, FallbackDecision, ProxyRequestContext, ProxyState
from booking_gateway.handlers import CacheHandler, HotelHandler, ProxyHandler
from booking_gateway.protocols import HotelSource, KeyValueStore
from booking_gateway.repositories import CatalogHotelSource, InMemoryKeyValueRepository, RedisKeyValueRepository
from booking_gateway.services import CacheService, FallbackResolver, HotelService, UpstreamProxy

__all__ = [
    # Configuration
    "settings",
    "get_settings",
    "get_redis_client",
    "FallbackCatalog",
    # Protocols (interfaces)
    "KeyValueStore",
    "HotelSource",
    # Services (business logic)
    "CacheService",
    "FallbackResolver",
    "HotelService",
    "UpstreamProxy",
    # Handlers (HTTP)
    "CacheHandler",
    "HotelHandler",
    "ProxyHandler",
    # Repositories (data access)
    "RedisKeyValueRepository",
    "InMemoryKeyValueRepository",
    "CatalogHotelSource",
    # Entities (domain models)
    "CacheEntryEntity",
    "FallbackDecision",
    "ProxyRequestContext",
    "ProxyState",
]
