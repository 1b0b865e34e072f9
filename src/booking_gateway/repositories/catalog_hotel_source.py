"""HotelSource backed by the fallback catalog's hotel records.

Stands in for the document database in deployments that only front the
provider API, so the cached hotel read paths always have data to serve.
"""

import copy
import math
from typing import Any

from booking_gateway.catalog import FallbackCatalog

EARTH_RADIUS_M = 6_371_000
NEAR_DISTANCE_M = 10_000


def distance_m(a: tuple[float, float], b: tuple[float, float]) -> float:
    """Great-circle distance in metres between two (longitude, latitude) points."""
    lng1, lat1 = map(math.radians, a)
    lng2, lat2 = map(math.radians, b)
    h = math.sin((lat2 - lat1) / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin((lng2 - lng1) / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(h))


def _coordinates(record: dict[str, Any]) -> tuple[float, float] | None:
    location = record.get("location") or {}
    if "longitude" not in location or "latitude" not in location:
        return None
    return float(location["longitude"]), float(location["latitude"])


class CatalogHotelSource:
    """Serves hotel records from a FallbackCatalog.

    Satisfies the HotelSource protocol.
    """

    def __init__(self, catalog: FallbackCatalog, max_distance_m: float = NEAR_DISTANCE_M) -> None:
        self._records = catalog.hotel_records()
        self._max_distance_m = max_distance_m

    def _matching(self, location: tuple[float, float] | None) -> list[dict[str, Any]]:
        if location is None:
            return list(self._records)

        nearby = []
        for record in self._records:
            point = _coordinates(record)
            if point is None:
                continue
            distance = distance_m(location, point)
            if distance <= self._max_distance_m:
                nearby.append((distance, record))
        # $near semantics: closest first
        nearby.sort(key=lambda pair: pair[0])
        return [record for _, record in nearby]

    async def find(
        self,
        page: int,
        limit: int,
        sort: str,
        fields: list[str] | None = None,
        location: tuple[float, float] | None = None,
    ) -> list[dict[str, Any]]:
        records = self._matching(location)

        field_name = sort.lstrip("-")
        if field_name:
            present = [r for r in records if r.get(field_name) is not None]
            missing = [r for r in records if r.get(field_name) is None]
            descending = sort.startswith("-")
            try:
                present.sort(key=lambda r: r[field_name], reverse=descending)
            except TypeError:
                # unorderable values (dicts, mixed types)
                present.sort(key=lambda r: str(r[field_name]), reverse=descending)
            records = present + missing

        start = (page - 1) * limit
        window = records[start : start + limit]

        if fields:
            return [{name: copy.deepcopy(r[name]) for name in ["id", *fields] if name in r} for r in window]
        return copy.deepcopy(window)

    async def count(self, location: tuple[float, float] | None = None) -> int:
        return len(self._matching(location))

    async def find_by_id(self, hotel_id: str) -> dict[str, Any] | None:
        for record in self._records:
            if str(record.get("id")) == hotel_id:
                return copy.deepcopy(record)
        return None
