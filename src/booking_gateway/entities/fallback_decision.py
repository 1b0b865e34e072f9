"""Fallback decision domain entity."""

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class FallbackDecision:
    """Outcome of matching a request path against the fallback catalog.

    Attributes:
        uses_fallback: Whether a synthetic body replaces the upstream one
        status_code: HTTP status to send
        body: JSON body to send
    """

    uses_fallback: bool
    status_code: int
    body: dict[str, Any] = field(default_factory=dict)

    def render(self) -> bytes:
        """Encode the body exactly as it goes on the wire."""
        return json.dumps(self.body).encode("utf-8")
