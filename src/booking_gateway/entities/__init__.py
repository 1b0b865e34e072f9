"""Domain entities for internal representation.

These are plain dataclasses used internally by services and handlers.
They are NOT used for API contracts - use DTOs from the dto package
for that.
"""

from .cache_entry import CacheEntryEntity
from .cache_metrics import CacheMetrics
from .fallback_decision import FallbackDecision
from .proxy_context import ProxyRequestContext, ProxyState

__all__ = [
    "CacheEntryEntity",
    "CacheMetrics",
    "FallbackDecision",
    "ProxyRequestContext",
    "ProxyState",
]
