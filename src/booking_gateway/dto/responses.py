"""Response DTOs for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Uniform error body used by every failing endpoint."""

    success: bool = Field(False, description="Always false for errors")
    error: str = Field(..., description="Short error name, e.g. 'Not Found'")
    message: str = Field(..., description="Human-readable explanation")
    timestamp: str | None = Field(None, description="ISO-8601 time the error was produced")


class ServiceInfoResponse(BaseModel):
    """Response DTO for the root endpoint."""

    name: str
    version: str
    description: str
    endpoints: dict[str, str]


class HealthCheckResponse(BaseModel):
    """Response DTO for the liveness check.

    Never depends on the upstream provider, so it keeps answering while
    the proxy is serving fallback data.
    """

    status: str = Field(..., description="'ok', or 'degraded' when the cache store is unreachable")
    timestamp: str = Field(..., description="ISO-8601 time of the check")
    api_key_configured: bool = Field(..., description="Whether a provider API key is set")
    cache_healthy: bool = Field(..., description="Whether the cache store answered a ping")


class ProbeResponse(BaseModel):
    """Response DTO for the static probe endpoint."""

    success: bool = True
    message: str
    timestamp: str


class ConfigResponse(BaseModel):
    """Response DTO describing the active configuration (no secrets)."""

    upstream_base_url: str
    upstream_host: str
    proxy_base_path: str
    api_key: str | None = Field(None, description="Provider key with all but the last 4 characters masked")
    api_key_configured: bool
    upstream_timeout: float
    cache_backend: str
    cache_query_ttl: int
    response_cache_ttl: int
    response_cache_paths: list[str]
    fallback_source: str = Field(..., description="'built-in' or the fallback data directory")


class CacheStatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    hits: int = Field(..., ge=0)
    misses: int = Field(..., ge=0)
    hit_rate: float = Field(..., ge=0.0, le=1.0)
    store_errors: int = Field(..., ge=0)
    responses_stored: int = Field(..., ge=0)
    default_ttl: int = Field(..., description="Default TTL for cached queries in seconds", ge=0)
    store: str = Field(..., description="Key-value backend in use")


class CacheClearResponse(BaseModel):
    """Response DTO for cache clearing."""

    success: bool
    deleted_count: int = Field(..., ge=0)
    message: str


class Pagination(BaseModel):
    """Pagination block of the hotel listing."""

    current: int
    pages: int


class HotelListResponse(BaseModel):
    """Response DTO for the hotel listing."""

    success: bool = True
    count: int
    total: int
    pagination: Pagination
    data: list[dict[str, Any]]


class HotelDetailResponse(BaseModel):
    """Response DTO for a single hotel."""

    success: bool = True
    data: dict[str, Any]
