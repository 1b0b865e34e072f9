"""Hotel read paths in front of the hotel data source.

Both reads go through CacheService.cache_query. Nothing here invalidates
on writes: a cached page or record lives until its TTL runs out.
"""

import math
from typing import Any

from booking_gateway.protocols import HotelSource
from booking_gateway.services.cache_service import CacheService


def parse_location(location: str | None) -> tuple[float, float] | None:
    """Parse a ``"longitude,latitude"`` query value.

    Raises:
        ValueError: If the value is not two comma-separated numbers
    """
    if not location:
        return None
    parts = location.split(",")
    if len(parts) != 2:
        raise ValueError(f"location must be 'longitude,latitude', got {location!r}")
    longitude, latitude = (float(part) for part in parts)
    return longitude, latitude


class HotelService:
    """Cached hotel listing and detail lookups."""

    def __init__(self, cache: CacheService, source: HotelSource, ttl: int | None = None) -> None:
        """Initialize the hotel service.

        Args:
            cache: Read-through cache (required).
            source: Hotel data source (required).
            ttl: Cache lifetime for hotel reads. Defaults to the cache's default TTL.
        """
        self._cache = cache
        self._source = source
        self._ttl = ttl or cache.default_ttl

    async def list_hotels(
        self,
        page: int = 1,
        limit: int = 10,
        sort: str = "-createdAt",
        fields: str | None = None,
        location: str | None = None,
    ) -> dict[str, Any]:
        """Return one page of hotels with pagination details.

        The page is cached under ``hotels:<page>:<limit>:<sort>:<fields>:<location>``;
        the total count is always read from the source.

        Raises:
            ValueError: If ``location`` cannot be parsed
        """
        coordinates = parse_location(location)
        field_list = [name.strip() for name in fields.split(",") if name.strip()] if fields else None
        key = CacheService.build_key("hotels", page, limit, sort, fields, location)

        hotels = await self._cache.cache_query(
            key,
            self._ttl,
            lambda: self._source.find(page, limit, sort, field_list, coordinates),
        )
        total = await self._source.count(coordinates)

        return {
            "success": True,
            "count": len(hotels),
            "total": total,
            "pagination": {"current": page, "pages": math.ceil(total / limit)},
            "data": hotels,
        }

    async def get_hotel(self, hotel_id: str) -> dict[str, Any] | None:
        """Return a single hotel record, or None if the source has no such hotel.

        A missing hotel is cached too, under ``hotel:<id>``.
        """
        return await self._cache.cache_query(
            CacheService.build_key("hotel", hotel_id),
            self._ttl,
            lambda: self._source.find_by_id(hotel_id),
        )
