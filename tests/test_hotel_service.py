"""
Tests for the cached hotel read paths.
"""

import pytest

from booking_gateway.repositories import CatalogHotelSource, InMemoryKeyValueRepository
from booking_gateway.services import CacheService, HotelService
from booking_gateway.services.hotel_service import parse_location

LONDON = "0.1278,51.5074"
PARIS = "2.3522,48.8566"


class CountingSource(CatalogHotelSource):
    """Catalog source that counts calls to find and find_by_id."""

    def __init__(self, catalog):
        super().__init__(catalog)
        self.finds = 0
        self.lookups = 0

    async def find(self, *args, **kwargs):
        self.finds += 1
        return await super().find(*args, **kwargs)

    async def find_by_id(self, hotel_id):
        self.lookups += 1
        return await super().find_by_id(hotel_id)


@pytest.fixture
def source(catalog):
    return CountingSource(catalog)


@pytest.fixture
def hotels(source):
    cache = CacheService(store=InMemoryKeyValueRepository(), default_ttl=300)
    return HotelService(cache=cache, source=source)


@pytest.mark.asyncio
async def test_list_hotels_shape(hotels):
    result = await hotels.list_hotels(page=1, limit=1, sort="-rating")

    assert result["success"] is True
    assert result["count"] == 1
    assert result["total"] == 2
    assert result["pagination"] == {"current": 1, "pages": 2}
    assert result["data"][0]["id"] == "789012"


@pytest.mark.asyncio
async def test_identical_listing_is_served_from_cache(hotels, source):
    await hotels.list_hotels(page=1, limit=10, sort="price")
    await hotels.list_hotels(page=1, limit=10, sort="price")
    assert source.finds == 1

    await hotels.list_hotels(page=1, limit=10, sort="-price")
    assert source.finds == 2


@pytest.mark.asyncio
async def test_sort_and_fields(hotels):
    ascending = await hotels.list_hotels(sort="price", fields="name,price")

    assert ascending["data"] == [
        {"id": "123456", "name": "Mock Hotel London", "price": 150},
        {"id": "789012", "name": "Another Mock Hotel", "price": 200},
    ]


@pytest.mark.asyncio
async def test_location_filter(hotels):
    near_london = await hotels.list_hotels(location=LONDON)
    near_paris = await hotels.list_hotels(location=PARIS)

    assert [hotel["id"] for hotel in near_london["data"]] == ["123456", "789012"]
    assert near_paris["data"] == []
    assert near_paris["total"] == 0


@pytest.mark.asyncio
async def test_get_hotel_cached_including_misses(hotels, source):
    assert (await hotels.get_hotel("123456"))["name"] == "Mock Hotel London"
    assert (await hotels.get_hotel("123456"))["name"] == "Mock Hotel London"
    assert await hotels.get_hotel("000") is None
    assert await hotels.get_hotel("000") is None

    assert source.lookups == 2


def test_parse_location():
    assert parse_location(None) is None
    assert parse_location("-0.12,51.5") == (-0.12, 51.5)
    with pytest.raises(ValueError):
        parse_location("51.5")
    with pytest.raises(ValueError):
        parse_location("a,b")
