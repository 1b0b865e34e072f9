"""
Tests for the fallback catalog and resolver.
"""

import json

import pytest

from booking_gateway.catalog import FallbackCatalog
from booking_gateway.services import FallbackResolver


@pytest.fixture
def resolver(catalog):
    return FallbackResolver(catalog)


def test_search_path_returns_hotel_collection(resolver, catalog):
    decision = resolver.resolve("/v1/hotels/search?dest_id=London&adults_number=2")

    assert decision.uses_fallback is True
    assert decision.status_code == 200
    assert decision.body == catalog.hotel_search
    assert [hotel["id"] for hotel in decision.body["data"]] == ["123456", "789012"]


@pytest.mark.parametrize("hotel_id", ["123456", "789012"])
def test_details_path_returns_known_hotel(resolver, hotel_id):
    decision = resolver.resolve(f"/v1/hotels/{hotel_id}")

    assert decision.status_code == 200
    assert decision.body["success"] is True
    assert decision.body["data"]["id"] == hotel_id
    assert decision.body["data"]["rooms"]


@pytest.mark.parametrize("hotel_id", ["999999", "not-a-number"])
def test_unknown_hotel_is_404(resolver, hotel_id):
    decision = resolver.resolve(f"/v1/hotels/{hotel_id}")

    assert decision.status_code == 404
    assert decision.body == {
        "success": False,
        "error": "Hotel not found",
        "message": f"No hotel found with ID: {hotel_id}",
    }


def test_locations_path(resolver):
    decision = resolver.resolve("/v1/locations?name=Paris")

    assert decision.status_code == 200
    assert [location["dest_id"] for location in decision.body["data"]] == ["London", "Paris", "NewYork"]


def test_unmatched_path_names_the_path(resolver):
    decision = resolver.resolve("/v1/reviews/123?page=2")

    assert decision.status_code == 404
    assert decision.body["error"] == "Not Found"
    assert decision.body["message"] == "No mock data available for: /v1/reviews/123"


def test_search_wins_over_details(resolver):
    """'search' must never be read as a hotel id."""
    assert resolver.resolve("/v1/hotels/search").status_code == 200
    assert resolver.resolve("/v1/hotels/search").body["count"] == 2


def test_render_is_deterministic(resolver):
    assert resolver.resolve("/v1/hotels/search").render() == resolver.resolve("/v1/hotels/search").render()


def test_catalog_directory_roundtrip(tmp_path, catalog):
    written = catalog.write_directory(tmp_path / "fallback")

    assert {path.name for path in written} == {
        "hotel-search.json",
        "locations.json",
        "hotel-123456.json",
        "hotel-789012.json",
    }
    loaded = FallbackCatalog.from_directory(tmp_path / "fallback")
    assert loaded.hotel_search == catalog.hotel_search
    assert loaded.hotel_details == catalog.hotel_details
    assert loaded.locations == catalog.locations


def test_catalog_directory_missing_files_use_defaults(tmp_path):
    (tmp_path / "hotel-42.json").write_text(json.dumps({"success": True, "data": {"id": "42"}}))

    loaded = FallbackCatalog.from_directory(tmp_path)

    assert list(loaded.hotel_details) == ["42"]
    assert loaded.hotel_search == FallbackCatalog.default().hotel_search
    assert FallbackResolver(loaded).resolve("/v1/hotels/123456").status_code == 404


def test_catalog_directory_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        FallbackCatalog.from_directory(tmp_path / "missing")

    (tmp_path / "locations.json").write_text("{not json")
    with pytest.raises(ValueError):
        FallbackCatalog.from_directory(tmp_path)


@pytest.mark.parametrize("path", ["/v1/hotels/search-by-coordinates", "/v1/hotels/search-filters"])
def test_search_matches_as_prefix(resolver, catalog, path):
    decision = resolver.resolve(f"{path}?dest_id=London")

    assert decision.status_code == 200
    assert decision.body == catalog.hotel_search


def test_hotel_sub_resource_uses_last_segment(resolver):
    decision = resolver.resolve("/v1/hotels/123456/photos")

    assert decision.status_code == 404
    assert decision.body["error"] == "Hotel not found"
    assert decision.body["message"] == "No hotel found with ID: photos"
    assert resolver.resolve("/v1/hotels/789012/").body["data"]["id"] == "789012"
