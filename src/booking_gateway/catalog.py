"""Fallback payloads served when the hotel provider cannot be reached.

The catalog is built once at startup and handed to the services that need
it. It either comes from the built-in defaults or from a directory laid
out as::

    hotel-search.json
    hotel-<id>.json      (one per hotel)
    locations.json
"""

import copy
import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

SEARCH_PATTERN = r"/v1/hotels/search"
DETAILS_PATTERN = r"/v1/hotels/[^/]+"
LOCATIONS_PATTERN = r"/v1/locations(?:/|$)"


def _hotel(
    hotel_id: str,
    name: str,
    address: str,
    latitude: float,
    longitude: float,
    price: int,
    rating: float,
    stars: int,
    description: str,
    amenities: list[str],
) -> dict[str, Any]:
    return {
        "id": hotel_id,
        "name": name,
        "location": {
            "city": "London",
            "country": "United Kingdom",
            "address": address,
            "latitude": latitude,
            "longitude": longitude,
        },
        "price": price,
        "currency": "USD",
        "rating": rating,
        "stars": stars,
        "description": description,
        "amenities": amenities,
    }


def _default_search() -> dict[str, Any]:
    first = _hotel(
        "123456",
        "Mock Hotel London",
        "123 London Road",
        51.5074,
        0.1278,
        150,
        8.7,
        4,
        "A luxury hotel in the heart of London",
        ["WiFi", "Pool", "Spa", "Restaurant"],
    )
    first.update(
        images=["https://example.com/hotel1.jpg"],
        reviewCount=123,
        checkIn="14:00",
        checkOut="11:00",
        hasAvailability=True,
    )
    second = _hotel(
        "789012",
        "Another Mock Hotel",
        "456 Baker Street",
        51.5237,
        0.1582,
        200,
        9.2,
        5,
        "A modern hotel in London with excellent amenities",
        ["WiFi", "Gym", "Bar", "Restaurant"],
    )
    second.update(
        images=["https://example.com/hotel3.jpg"],
        reviewCount=256,
        checkIn="15:00",
        checkOut="12:00",
        hasAvailability=True,
    )
    return {"success": True, "count": 2, "data": [first, second]}


def _default_details() -> dict[str, dict[str, Any]]:
    first = _hotel(
        "123456",
        "Mock Hotel London",
        "123 London Road",
        51.5074,
        0.1278,
        150,
        8.7,
        4,
        "A luxury hotel in the heart of London",
        ["WiFi", "Pool", "Spa", "Restaurant"],
    )
    first.update(
        images=["https://example.com/hotel1.jpg", "https://example.com/hotel2.jpg"],
        rooms=[
            {
                "id": "room1",
                "name": "Deluxe Room",
                "description": "Spacious room with city view",
                "price": 150,
                "capacity": 2,
                "amenities": ["TV", "Safe", "Minibar"],
            },
            {
                "id": "room2",
                "name": "Suite",
                "description": "Luxury suite with separate living area",
                "price": 250,
                "capacity": 4,
                "amenities": ["TV", "Safe", "Minibar", "Jacuzzi"],
            },
        ],
        reviews=[
            {
                "id": "review1",
                "rating": 9.0,
                "title": "Excellent stay",
                "comment": "We had a wonderful time at this hotel.",
                "date": "2023-12-15",
                "reviewer": {"name": "John D.", "country": "United States"},
            }
        ],
    )
    second = _hotel(
        "789012",
        "Another Mock Hotel",
        "456 Baker Street",
        51.5237,
        0.1582,
        200,
        9.2,
        5,
        "A modern hotel in London with excellent amenities",
        ["WiFi", "Gym", "Bar", "Restaurant"],
    )
    second.update(
        images=["https://example.com/hotel3.jpg", "https://example.com/hotel4.jpg"],
        rooms=[
            {
                "id": "room1",
                "name": "Standard Room",
                "description": "Comfortable room with modern decor",
                "price": 200,
                "capacity": 2,
                "amenities": ["TV", "Safe", "Minibar"],
            },
            {
                "id": "room2",
                "name": "Executive Suite",
                "description": "Spacious suite with city view",
                "price": 350,
                "capacity": 2,
                "amenities": ["TV", "Safe", "Minibar", "Work Desk"],
            },
        ],
        reviews=[
            {
                "id": "review1",
                "rating": 9.5,
                "title": "Perfect stay",
                "comment": "One of the best hotels I have ever stayed in.",
                "date": "2024-01-20",
                "reviewer": {"name": "Emma S.", "country": "Germany"},
            }
        ],
    )
    return {
        "123456": {"success": True, "data": first},
        "789012": {"success": True, "data": second},
    }


def _default_locations() -> dict[str, Any]:
    return {
        "success": True,
        "data": [
            {"dest_id": "London", "name": "London", "country": "United Kingdom", "type": "city"},
            {"dest_id": "Paris", "name": "Paris", "country": "France", "type": "city"},
            {"dest_id": "NewYork", "name": "New York", "country": "United States", "type": "city"},
        ],
    }


@dataclass(frozen=True)
class FallbackCatalog:
    """Static substitute bodies plus the path shapes they answer.

    Attributes:
        hotel_search: Collection body for hotel search requests
        hotel_details: Hotel id -> single-record body
        locations: Collection body for location lookups
        search_pattern: Prefix regex matched against the upstream path for searches
        details_pattern: Regex matched for hotel details; the last path segment is the id
        locations_pattern: Regex matched for location lookups
    """

    hotel_search: dict[str, Any]
    hotel_details: dict[str, dict[str, Any]]
    locations: dict[str, Any]
    search_pattern: re.Pattern[str] = field(default=re.compile(SEARCH_PATTERN))
    details_pattern: re.Pattern[str] = field(default=re.compile(DETAILS_PATTERN))
    locations_pattern: re.Pattern[str] = field(default=re.compile(LOCATIONS_PATTERN))

    @classmethod
    def default(cls) -> "FallbackCatalog":
        """Build the catalog shipped with the service (two London hotels, three cities)."""
        return cls(
            hotel_search=_default_search(),
            hotel_details=_default_details(),
            locations=_default_locations(),
        )

    @classmethod
    def from_directory(cls, directory: str | Path) -> "FallbackCatalog":
        """Load the catalog from JSON files, using defaults for missing ones.

        Args:
            directory: Folder holding hotel-search.json, hotel-<id>.json
                and locations.json

        Returns:
            FallbackCatalog built from the files

        Raises:
            FileNotFoundError: If the directory does not exist
            ValueError: If a file is not valid JSON
        """
        root = Path(directory)
        if not root.is_dir():
            raise FileNotFoundError(f"Fallback data directory not found: {root}")

        defaults = cls.default()

        def load(path: Path) -> dict[str, Any]:
            try:
                return json.loads(path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid fallback data in {path}: {e}") from e

        search_file = root / "hotel-search.json"
        locations_file = root / "locations.json"
        details = {
            path.stem.removeprefix("hotel-"): load(path)
            for path in sorted(root.glob("hotel-*.json"))
            if path.name != "hotel-search.json"
        }

        return cls(
            hotel_search=load(search_file) if search_file.exists() else defaults.hotel_search,
            hotel_details=details or defaults.hotel_details,
            locations=load(locations_file) if locations_file.exists() else defaults.locations,
        )

    def write_directory(self, directory: str | Path) -> list[Path]:
        """Dump the catalog as JSON files, creating the directory if needed.

        Returns:
            Paths of the files written
        """
        root = Path(directory)
        root.mkdir(parents=True, exist_ok=True)

        files = {"hotel-search.json": self.hotel_search, "locations.json": self.locations}
        files.update({f"hotel-{hotel_id}.json": body for hotel_id, body in self.hotel_details.items()})

        written = []
        for name, body in files.items():
            path = root / name
            path.write_text(json.dumps(body, indent=2), encoding="utf-8")
            written.append(path)
        return written

    def hotel_records(self) -> list[dict[str, Any]]:
        """Return copies of every detailed hotel record, in catalog order."""
        return [copy.deepcopy(body["data"]) for body in self.hotel_details.values() if "data" in body]
