from typing import Annotated, Any

import httpx
from fastapi import APIRouter, FastAPI, Query, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from booking_gateway.api.dependencies import (
    CacheHandlerDep,
    FallbackSourceDep,
    HotelHandlerDep,
    ProxyHandlerDep,
    make_lifespan,
)
from booking_gateway.api.errors import register_exception_handlers
from booking_gateway.api.response_cache import ResponseCacheMiddleware
from booking_gateway.catalog import FallbackCatalog
from booking_gateway.config import Settings, settings
from booking_gateway.dto import (
    CacheClearParams,
    CacheClearResponse,
    CacheStatsResponse,
    ConfigResponse,
    HealthCheckResponse,
    HotelListParams,
    ProbeResponse,
    ServiceInfoResponse,
)
from booking_gateway.protocols import HotelSource, KeyValueStore

VERSION = "0.1.0"
PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


def create_app(
    config: Settings | None = None,
    store: KeyValueStore | None = None,
    catalog: FallbackCatalog | None = None,
    http_client: httpx.AsyncClient | None = None,
    hotel_source: HotelSource | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Settings to run with. Defaults to the environment settings.
        store: Key-value store. Defaults to the one selected by CACHE_BACKEND.
        catalog: Fallback catalog. Defaults to FALLBACK_DATA_DIR or the built-in one.
        http_client: Client for upstream calls. Defaults to a new AsyncClient.
        hotel_source: Hotel data source. Defaults to the catalog's hotels.

    Returns:
        Configured FastAPI application
    """
    config = config or settings

    app = FastAPI(
        title="Booking Gateway",
        description="Read-through cache and hotel provider proxy with regional-block fallback",
        version=VERSION,
        lifespan=make_lifespan(config, store, catalog, http_client, hotel_source),
    )

    app.add_middleware(
        ResponseCacheMiddleware,  # type: ignore[arg-type]
        ttl=config.response_cache_ttl,
        paths=config.response_cache_paths,
    )
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/", response_model=ServiceInfoResponse)
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": "Booking Gateway",
            "version": VERSION,
            "description": "Read-through cache and hotel provider proxy with regional-block fallback",
            "endpoints": {
                "health": "/health",
                "test": "/test",
                "config": "/config",
                "stats": "/stats",
                "hotels": "/api/hotels",
                "cache": "/api/cache",
                "proxy": f"{config.proxy_base_path}/v1/hotels/search",
                "direct": f"{config.proxy_base_path}/direct/hotels/search",
                "docs": "/docs",
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(handler: CacheHandlerDep) -> HealthCheckResponse:
        """Liveness check; does not depend on the upstream provider."""
        return await handler.health_check()

    @app.get("/test", response_model=ProbeResponse)
    async def probe(handler: CacheHandlerDep) -> ProbeResponse:
        """Static probe confirming the proxy is up."""
        return await handler.probe()

    @app.get("/config", response_model=ConfigResponse)
    async def active_config(handler: CacheHandlerDep, fallback_source: FallbackSourceDep) -> ConfigResponse:
        """Report which configuration is active (secrets masked)."""
        return await handler.get_config(fallback_source)

    @app.get("/stats", response_model=CacheStatsResponse)
    async def get_stats(handler: CacheHandlerDep) -> CacheStatsResponse:
        """Get cache statistics."""
        return await handler.get_stats()

    @app.post("/stats/reset", response_model=dict[str, Any])
    async def reset_stats(handler: CacheHandlerDep) -> dict:
        """Reset cache statistics."""
        return await handler.reset_stats()

    @app.delete("/api/cache", response_model=CacheClearResponse)
    async def clear_cache(
        handler: CacheHandlerDep,
        params: Annotated[CacheClearParams, Query()],
    ) -> CacheClearResponse:
        """Delete cached queries and responses matching a pattern."""
        return await handler.clear_cache(params)

    @app.get("/api/hotels")
    async def list_hotels(handler: HotelHandlerDep, params: Annotated[HotelListParams, Query()]):
        """List hotels (cached per distinct query)."""
        return await handler.list_hotels(params)

    @app.get("/api/hotels/{hotel_id}")
    async def get_hotel(handler: HotelHandlerDep, hotel_id: str):
        """Get a single hotel (cached per id)."""
        return await handler.get_hotel(hotel_id)

    booking = APIRouter(prefix=config.proxy_base_path, tags=["booking"])

    # Direct catalog endpoints are registered before the catch-all proxy route.
    @booking.get("/direct/hotels/search")
    async def direct_hotel_search(handler: ProxyHandlerDep) -> Response:
        """Serve the canned hotel search without contacting upstream."""
        return await handler.direct_hotel_search()

    @booking.get("/direct/hotels/{hotel_id}")
    async def direct_hotel_details(handler: ProxyHandlerDep, hotel_id: str) -> Response:
        """Serve a canned hotel record without contacting upstream."""
        return await handler.direct_hotel_details(hotel_id)

    @booking.get("/direct/locations")
    async def direct_locations(handler: ProxyHandlerDep) -> Response:
        """Serve the canned locations without contacting upstream."""
        return await handler.direct_locations()

    @booking.api_route("/{path:path}", methods=PROXY_METHODS)
    async def forward(handler: ProxyHandlerDep, request: Request) -> Response:
        """Proxy to the hotel provider, falling back to canned data on 451 or transport errors."""
        return await handler.proxy(request)

    app.include_router(booking)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "booking_gateway.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
