"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract for the service's
own endpoints. Proxied and fallback bodies are relayed as-is and are not
modelled here.

Internal domain logic should use entities from the entities package.
"""

from .requests import CacheClearParams, HotelListParams
from .responses import (
    CacheClearResponse,
    CacheStatsResponse,
    ConfigResponse,
    ErrorResponse,
    HealthCheckResponse,
    HotelDetailResponse,
    HotelListResponse,
    Pagination,
    ProbeResponse,
    ServiceInfoResponse,
)

__all__ = [
    "CacheClearParams",
    "HotelListParams",
    "CacheClearResponse",
    "CacheStatsResponse",
    "ConfigResponse",
    "ErrorResponse",
    "HealthCheckResponse",
    "HotelDetailResponse",
    "HotelListResponse",
    "Pagination",
    "ProbeResponse",
    "ServiceInfoResponse",
]
