"""Hotel data source protocol.

The hotel read paths sit in front of a document store that this service
does not own. Anything able to page, count and fetch hotel records by id
can back them.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class HotelSource(Protocol):
    """Protocol for hotel record providers."""

    async def find(
        self,
        page: int,
        limit: int,
        sort: str,
        fields: list[str] | None = None,
        location: tuple[float, float] | None = None,
    ) -> list[dict[str, Any]]:
        """Return one page of hotel records.

        Args:
            page: 1-based page number
            limit: Page size
            sort: Field name, prefixed with '-' for descending order
            fields: Optional projection of top-level fields
            location: Optional (longitude, latitude) to search around

        Returns:
            JSON-serializable hotel records
        """
        ...

    async def count(self, location: tuple[float, float] | None = None) -> int:
        """Count hotel records matching the location filter."""
        ...

    async def find_by_id(self, hotel_id: str) -> dict[str, Any] | None:
        """Fetch a single hotel record, or None if unknown."""
        ...
