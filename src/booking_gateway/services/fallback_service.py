"""Fallback resolution for blocked or unreachable upstream calls.

Maps an upstream path onto one of the catalog's endpoint shapes. The same
resolver serves the HTTP 451 path and the transport-error path, so both
failure causes produce identical responses.
"""

from booking_gateway.catalog import FallbackCatalog
from booking_gateway.entities import FallbackDecision


class FallbackResolver:
    """Picks the substitute body for a request path.

    Every branch ends in a concrete FallbackDecision; unknown shapes and
    unknown hotel ids become structured 404 bodies.
    """

    def __init__(self, catalog: FallbackCatalog) -> None:
        """Initialize the resolver.

        Args:
            catalog: Substitute payloads and the path patterns they answer.
        """
        self._catalog = catalog

    def resolve(self, path: str) -> FallbackDecision:
        """Resolve the fallback body for an upstream path.

        Order of matching:
        1. hotel search (any path starting with the search prefix)
        2. hotel details (last path segment is the hotel id)
        3. locations
        4. anything else is a 404 naming the path

        Args:
            path: Upstream path, optionally with a query string

        Returns:
            FallbackDecision with ``uses_fallback`` set
        """
        stripped = path.split("?", 1)[0]

        if self._catalog.search_pattern.search(stripped):
            return self.hotel_search()

        if self._catalog.details_pattern.search(stripped):
            # sub-resources such as /v1/hotels/123456/photos resolve by their last segment
            return self.hotel_details(stripped.rstrip("/").rsplit("/", 1)[-1])

        if self._catalog.locations_pattern.search(stripped):
            return self.locations()

        return FallbackDecision(
            uses_fallback=True,
            status_code=404,
            body={
                "success": False,
                "error": "Not Found",
                "message": f"No mock data available for: {stripped}",
            },
        )

    def hotel_search(self) -> FallbackDecision:
        """Substitute for the hotel search collection."""
        return FallbackDecision(uses_fallback=True, status_code=200, body=self._catalog.hotel_search)

    def hotel_details(self, hotel_id: str) -> FallbackDecision:
        """Substitute for a single hotel, or a 404 body when the id is unknown."""
        record = self._catalog.hotel_details.get(hotel_id)
        if record is not None:
            return FallbackDecision(uses_fallback=True, status_code=200, body=record)

        return FallbackDecision(
            uses_fallback=True,
            status_code=404,
            body={
                "success": False,
                "error": "Hotel not found",
                "message": f"No hotel found with ID: {hotel_id}",
            },
        )

    def locations(self) -> FallbackDecision:
        """Substitute for the locations collection."""
        return FallbackDecision(uses_fallback=True, status_code=200, body=self._catalog.locations)

    @property
    def catalog(self) -> FallbackCatalog:
        """Get the catalog (for testing)."""
        return self._catalog
