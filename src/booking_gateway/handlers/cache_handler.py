"""HTTP handlers for cache and introspection operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, validation, and error handling.
"""

from datetime import datetime, timezone

from fastapi import HTTPException, status

from booking_gateway.config import Settings
from booking_gateway.dto import (
    CacheClearParams,
    CacheClearResponse,
    CacheStatsResponse,
    ConfigResponse,
    HealthCheckResponse,
    ProbeResponse,
)
from booking_gateway.services import CacheService


def utc_now() -> str:
    """Current time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


class CacheHandler:
    """HTTP handlers for cache maintenance and service introspection.

    None of these touch the upstream provider, so they stay available
    while the proxy is falling back to canned data.

    Example:
        ```python
        handler = CacheHandler(cache_service=cache_service, config=settings)

        @app.get("/health", response_model=HealthCheckResponse)
        async def health():
            return await handler.health_check()
        ```
    """

    def __init__(self, cache_service: CacheService, config: Settings) -> None:
        """Initialize the cache handler.

        Args:
            cache_service: The cache service (required).
            config: Active settings, reported by the config endpoint.
        """
        self._cache = cache_service
        self._config = config

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        cache_healthy = await self._cache.is_healthy()

        return HealthCheckResponse(
            status="ok" if cache_healthy else "degraded",
            timestamp=utc_now(),
            api_key_configured=self._config.api_key_configured,
            cache_healthy=cache_healthy,
        )

    async def probe(self) -> ProbeResponse:
        """Handle GET /test requests."""
        return ProbeResponse(message="Proxy server is running correctly", timestamp=utc_now())

    async def get_config(self, fallback_source: str) -> ConfigResponse:
        """Handle GET /config requests.

        Args:
            fallback_source: Where the fallback catalog was loaded from
        """
        config = self._config
        return ConfigResponse(
            upstream_base_url=config.upstream_base_url,
            upstream_host=config.upstream_host,
            proxy_base_path=config.proxy_base_path,
            api_key=config.masked_api_key,
            api_key_configured=config.api_key_configured,
            upstream_timeout=config.upstream_timeout,
            cache_backend=config.cache_backend,
            cache_query_ttl=config.cache_query_ttl,
            response_cache_ttl=config.response_cache_ttl,
            response_cache_paths=list(config.response_cache_paths),
            fallback_source=fallback_source,
        )

    async def get_stats(self) -> CacheStatsResponse:
        """Handle GET /stats requests.

        Raises:
            HTTPException: If an error occurs while fetching stats
        """
        try:
            stats = self._cache.get_stats()
            return CacheStatsResponse(**stats)
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to get stats: {e}",
            ) from e

    async def reset_stats(self) -> dict:
        """Handle POST /stats/reset requests."""
        self._cache.reset_stats()
        return {"success": True, "message": "Cache statistics reset"}

    async def clear_cache(self, params: CacheClearParams) -> CacheClearResponse:
        """Handle DELETE /api/cache requests.

        Store failures are already absorbed by the service and show up
        here as zero deleted entries.
        """
        count = await self._cache.clear(params.pattern)

        return CacheClearResponse(
            success=True,
            deleted_count=count,
            message=f"Cleared {count} cache entries matching {params.pattern!r}",
        )
