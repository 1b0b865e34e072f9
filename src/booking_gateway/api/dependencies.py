"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Collaborators (store, catalog, HTTP client, hotel source) can be
      injected through create_app, so tests never touch global state
"""

from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Annotated

import httpx
from fastapi import Depends, FastAPI, Request

from booking_gateway.catalog import FallbackCatalog
from booking_gateway.config import Settings
from booking_gateway.handlers import CacheHandler, HotelHandler, ProxyHandler
from booking_gateway.protocols import HotelSource, KeyValueStore
from booking_gateway.repositories import (
    CatalogHotelSource,
    InMemoryKeyValueRepository,
    RedisKeyValueRepository,
)
from booking_gateway.services import CacheService, FallbackResolver, HotelService, UpstreamProxy
from booking_gateway.utils import get_logger, setup_logging

logger = get_logger(__name__)


def _state(request: Request, name: str):
    value = getattr(request.app.state, name, None)
    if value is None:
        raise RuntimeError(f"{name} not initialized. Check lifespan setup.")
    return value


def get_cache_service(request: Request) -> CacheService:
    """Dependency injection for CacheService from app.state.

    Raises:
        RuntimeError: If service is not initialized
    """
    return _state(request, "cache_service")


def get_cache_handler(request: Request) -> CacheHandler:
    """Dependency injection for CacheHandler from app.state."""
    return _state(request, "cache_handler")


def get_proxy_handler(request: Request) -> ProxyHandler:
    """Dependency injection for ProxyHandler from app.state."""
    return _state(request, "proxy_handler")


def get_hotel_handler(request: Request) -> HotelHandler:
    """Dependency injection for HotelHandler from app.state."""
    return _state(request, "hotel_handler")


def get_fallback_source(request: Request) -> str:
    """Where the fallback catalog was loaded from."""
    return _state(request, "fallback_source")


def build_store(config: Settings) -> KeyValueStore:
    """Create the key-value store selected by CACHE_BACKEND."""
    if config.cache_backend == "memory":
        return InMemoryKeyValueRepository()
    return RedisKeyValueRepository.create(config)


def build_catalog(config: Settings) -> tuple[FallbackCatalog, str]:
    """Load the fallback catalog and describe where it came from."""
    if config.fallback_data_dir:
        return FallbackCatalog.from_directory(config.fallback_data_dir), config.fallback_data_dir
    return FallbackCatalog.default(), "built-in"


def make_lifespan(
    config: Settings,
    store: KeyValueStore | None = None,
    catalog: FallbackCatalog | None = None,
    http_client: httpx.AsyncClient | None = None,
    hotel_source: HotelSource | None = None,
) -> Callable[[FastAPI], AbstractAsyncContextManager[None]]:
    """Build the lifespan context manager for the FastAPI app.

    Initializes all layers and stores them in app.state:
    1. Repositories (store, hotel source) - created unless injected
    2. Services (cache, fallback, proxy, hotels)
    3. Handlers (HTTP endpoints)

    Collaborators passed in are owned by the caller and are not closed on
    shutdown; the ones created here are.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(config.log_level, config.log_file)

        kv_store = store if store is not None else build_store(config)
        if catalog is not None:
            fallback_catalog, fallback_source = catalog, "injected"
        else:
            fallback_catalog, fallback_source = build_catalog(config)
        client = http_client or httpx.AsyncClient(timeout=config.upstream_timeout, follow_redirects=False)

        cache_service = CacheService.create(store=kv_store, default_ttl=config.cache_query_ttl)
        resolver = FallbackResolver(fallback_catalog)
        proxy = UpstreamProxy.create(client=client, resolver=resolver, config=config)
        hotel_service = HotelService(
            cache=cache_service,
            source=hotel_source or CatalogHotelSource(fallback_catalog),
            ttl=config.cache_query_ttl,
        )

        # Store in app.state (FastAPI pattern)
        app.state.settings = config
        app.state.cache_service = cache_service
        app.state.fallback_source = fallback_source
        app.state.cache_handler = CacheHandler(cache_service=cache_service, config=config)
        app.state.proxy_handler = ProxyHandler(proxy=proxy)
        app.state.hotel_handler = HotelHandler(hotel_service=hotel_service)

        logger.info(f"Upstream: {config.upstream_base_url} via {config.proxy_base_path}")
        logger.info(f"API key: {config.masked_api_key or 'not set'}")
        logger.info(f"Cache backend: {config.cache_backend} ({type(kv_store).__name__})")
        logger.info(f"Fallback catalog: {fallback_source}")
        if await cache_service.is_healthy():
            logger.info("Cache store connection successful")
        else:
            logger.warning("Cache store unreachable; serving without cache until it recovers")

        yield

        # Cleanup - remove from app.state
        del app.state.hotel_handler
        del app.state.proxy_handler
        del app.state.cache_handler
        del app.state.cache_service
        if http_client is None:
            await client.aclose()
        if store is None and hasattr(kv_store, "close"):
            await kv_store.close()
        logger.info("Booking gateway shut down")

    return lifespan


# Type aliases for cleaner dependency injection
CacheHandlerDep = Annotated[CacheHandler, Depends(get_cache_handler)]
ProxyHandlerDep = Annotated[ProxyHandler, Depends(get_proxy_handler)]
HotelHandlerDep = Annotated[HotelHandler, Depends(get_hotel_handler)]
CacheServiceDep = Annotated[CacheService, Depends(get_cache_service)]
FallbackSourceDep = Annotated[str, Depends(get_fallback_source)]
