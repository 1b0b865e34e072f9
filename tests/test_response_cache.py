"""
Tests for the GET response-cache middleware in front of the proxy.
"""

import asyncio
from dataclasses import replace

import httpx

from tests.conftest import PROXY_BASE, BrokenStore

LOCATIONS = f"{PROXY_BASE}/v1/locations?name=London"


def test_repeated_get_is_served_from_cache(client, upstream, store):
    first = client.get(LOCATIONS)
    second = client.get(LOCATIONS)

    assert first.status_code == second.status_code == 200
    assert first.content == second.content
    assert len(upstream.requests) == 1
    assert asyncio.run(store.keys("cache:*")) == [f"cache:{LOCATIONS}"]


def test_query_string_is_part_of_the_key(client, upstream):
    client.get(f"{PROXY_BASE}/v1/locations?name=London")
    client.get(f"{PROXY_BASE}/v1/locations?name=Paris")

    assert len(upstream.requests) == 2


def test_non_get_requests_bypass_cache(client, upstream):
    client.post(f"{PROXY_BASE}/v1/bookings", json={"hotel_id": "123456"})
    client.post(f"{PROXY_BASE}/v1/bookings", json={"hotel_id": "123456"})

    assert len(upstream.requests) == 2


def test_fallback_responses_are_not_cached(client, upstream, store):
    upstream.block()
    client.get(LOCATIONS)
    client.get(LOCATIONS)

    assert len(upstream.requests) == 2
    assert asyncio.run(store.keys("cache:*")) == []


def test_cache_clear_forces_refetch(client, upstream):
    client.get(LOCATIONS)
    cleared = client.delete("/api/cache", params={"pattern": f"{PROXY_BASE}/v1/locations*"})
    client.get(LOCATIONS)

    assert cleared.json()["deleted_count"] == 1
    assert len(upstream.requests) == 2


def test_zero_ttl_disables_response_cache(make_client, settings, upstream):
    with make_client(config=replace(settings, response_cache_ttl=0)) as client:
        client.get(LOCATIONS)
        client.get(LOCATIONS)

    assert len(upstream.requests) == 2


def test_unreachable_store_does_not_break_proxy(make_client, upstream):
    with make_client(store=BrokenStore()) as client:
        first = client.get(LOCATIONS)
        second = client.get(LOCATIONS)
        health = client.get("/health")

    assert first.status_code == second.status_code == 200
    assert first.json() == {"success": True, "data": [{"id": "live-1"}]}
    assert len(upstream.requests) == 2
    assert health.json()["status"] == "degraded"
    assert health.json()["cache_healthy"] is False


def test_broken_upstream_stream_is_not_cached(client, upstream, store):
    upstream.truncate(b'{"success": true, "data": [{"id": "liv')
    truncated = client.get(LOCATIONS)

    upstream.responder = lambda request: httpx.Response(200, json={"success": True, "data": [{"id": "live-1"}]})
    recovered = client.get(LOCATIONS)

    assert truncated.content == b'{"success": true, "data": [{"id": "liv'
    assert recovered.json() == {"success": True, "data": [{"id": "live-1"}]}
    assert len(upstream.requests) == 2
    assert asyncio.run(store.keys("cache:*")) == [f"cache:{LOCATIONS}"]
