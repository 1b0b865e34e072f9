#!/usr/bin/env python3
"""
Demo script for the booking gateway.

Walks a running gateway through its endpoints: liveness, active config,
a proxied hotel search (real or fallback data), the direct catalog and the
cached hotel listing.

Usage:
    python scripts/demo.py [base_url]
"""

import sys
import time

import httpx

DEFAULT_BASE_URL = "http://localhost:3030"
PROXY_BASE = "/api/v1/booking"

ENDPOINTS = [
    ("Health Check", "/health"),
    ("Test Endpoint", "/test"),
    ("Active Config", "/config"),
    (
        "Hotel Search (proxied)",
        f"{PROXY_BASE}/v1/hotels/search?dest_id=London&checkin_date=2024-05-01"
        "&checkout_date=2024-05-05&adults_number=2&room_number=1&units=metric",
    ),
    ("Hotel Details (proxied)", f"{PROXY_BASE}/v1/hotels/123456"),
    ("Locations (proxied)", f"{PROXY_BASE}/v1/locations?name=London"),
    ("Hotel Search (direct)", f"{PROXY_BASE}/direct/hotels/search"),
    ("Hotel Listing (cached)", "/api/hotels?limit=5&sort=-rating"),
]


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def check(client: httpx.Client, name: str, path: str) -> bool:
    """Call one endpoint and print what came back."""
    print(f"\n🔄 Testing: {name} ({path})")
    start = time.time()
    try:
        response = client.get(path, headers={"Accept": "application/json"})
    except httpx.HTTPError as e:
        print(f"  ✗ Request failed: {e}")
        return False

    elapsed_ms = (time.time() - start) * 1000
    mock = response.headers.get("X-Mock-Data") == "true"
    print(f"  Status: {response.status_code} ({elapsed_ms:.1f} ms){'  [mock data]' if mock else ''}")

    try:
        body = response.json()
    except ValueError:
        print(f"  Body (not JSON): {response.text[:200]}")
        return False

    if isinstance(body, dict) and isinstance(body.get("data"), list):
        print(f"  Items: {len(body['data'])}")
    else:
        print(f"  Body: {str(body)[:200]}")
    return response.status_code < 500


def demo_repeat_is_cached(client: httpx.Client) -> None:
    """Show that an identical listing query is answered from the cache."""
    print_section("Read-through cache")
    client.post("/stats/reset")
    for attempt in (1, 2):
        client.get("/api/hotels", params={"page": 1, "limit": 2})
        stats = client.get("/stats").json()
        print(f"  Call {attempt}: hits={stats['hits']} misses={stats['misses']}")


def main() -> int:
    base_url = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_BASE_URL

    print_section(f"Booking gateway at {base_url}")
    with httpx.Client(base_url=base_url, timeout=15.0) as client:
        results = [check(client, name, path) for name, path in ENDPOINTS]
        demo_repeat_is_cached(client)

    print_section("Summary")
    print(f"  {sum(results)}/{len(results)} endpoints answered")
    return 0 if all(results) else 1


if __name__ == "__main__":
    sys.exit(main())
