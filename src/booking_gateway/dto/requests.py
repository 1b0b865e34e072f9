"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class HotelListParams(BaseModel):
    """Query parameters for the hotel listing.

    The handler passes these through to the hotel service, which turns
    every one of them into a segment of the cache key.
    """

    page: int = Field(1, description="1-based page number", ge=1)
    limit: int = Field(10, description="Page size", ge=1, le=100)
    sort: str = Field("-createdAt", description="Sort field, '-' prefix for descending")
    fields: str | None = Field(None, description="Comma-separated projection, e.g. 'name,price'")
    location: str | None = Field(
        None,
        description="'longitude,latitude'; only hotels within 10 km are returned",
        pattern=r"^-?\d+(\.\d+)?,-?\d+(\.\d+)?$",
    )


class CacheClearParams(BaseModel):
    """Query parameters for clearing cache entries."""

    pattern: str = Field(
        "*",
        description="Glob pattern applied to cached query keys and request URLs",
        min_length=1,
    )
