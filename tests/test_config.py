"""
Tests for settings validation.
"""

from dataclasses import replace

import pytest


@pytest.mark.parametrize(
    "changes",
    [
        {"cache_backend": "memcached"},
        {"cache_query_ttl": 0},
        {"response_cache_ttl": -1},
        {"upstream_timeout": 0},
        {"proxy_base_path": "api/v1/booking"},
        {"proxy_base_path": "/api/v1/booking/"},
    ],
)
def test_invalid_settings_rejected(settings, changes):
    with pytest.raises(ValueError):
        replace(settings, **changes)


def test_masked_api_key(settings):
    assert settings.api_key_configured is True
    assert settings.masked_api_key == "****1234"

    keyless = replace(settings, rapidapi_key=None)
    assert keyless.api_key_configured is False
    assert keyless.masked_api_key is None
