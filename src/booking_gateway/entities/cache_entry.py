"""Cache entry domain entity."""

import json
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntryEntity:
    """Domain entity for a value held in the key-value store.

    Attributes:
        key: Fully namespaced storage key (e.g. ``query:hotel:123456``)
        value: The JSON-serializable cached result
        ttl: Time-to-live in seconds
    """

    key: str
    value: Any
    ttl: int

    def serialize(self) -> str:
        """Encode the value as the JSON text written to the store."""
        return json.dumps(self.value)
