"""Per-request proxy state."""

from dataclasses import dataclass, field
from enum import Enum

from .fallback_decision import FallbackDecision


class ProxyState(str, Enum):
    """Lifecycle of a single proxied request."""

    FORWARDING = "forwarding"
    UPSTREAM_OK = "upstream_ok"
    UPSTREAM_BLOCKED = "upstream_blocked"
    UPSTREAM_ERROR = "upstream_error"
    FALLBACK_RESOLVED = "fallback_resolved"


ALLOWED_TRANSITIONS: dict[ProxyState, frozenset[ProxyState]] = {
    ProxyState.FORWARDING: frozenset(
        {ProxyState.UPSTREAM_OK, ProxyState.UPSTREAM_BLOCKED, ProxyState.UPSTREAM_ERROR}
    ),
    ProxyState.UPSTREAM_BLOCKED: frozenset({ProxyState.FALLBACK_RESOLVED}),
    ProxyState.UPSTREAM_ERROR: frozenset({ProxyState.FALLBACK_RESOLVED}),
    ProxyState.UPSTREAM_OK: frozenset(),
    ProxyState.FALLBACK_RESOLVED: frozenset(),
}


@dataclass
class ProxyRequestContext:
    """Ephemeral record of one inbound request travelling through the proxy.

    Attributes:
        method: HTTP method of the inbound request
        path: Inbound path, including the proxy base prefix
        upstream_path: Path sent upstream, base prefix removed
        query: Raw query string (without the leading '?')
        state: Current position in the proxy state machine
        upstream_status: Status returned by upstream, if it answered
        decision: Fallback decision, once resolved
        history: Every state visited, in order
    """

    method: str
    path: str
    upstream_path: str
    query: str = ""
    state: ProxyState = ProxyState.FORWARDING
    upstream_status: int | None = None
    decision: FallbackDecision | None = None
    history: list[ProxyState] = field(default_factory=lambda: [ProxyState.FORWARDING])

    def transition(self, new_state: ProxyState) -> None:
        """Move to ``new_state``.

        Raises:
            ValueError: If the transition is not part of the state machine
        """
        if new_state not in ALLOWED_TRANSITIONS[self.state]:
            raise ValueError(f"Invalid proxy state transition {self.state.value} -> {new_state.value}")
        self.state = new_state
        self.history.append(new_state)

    @property
    def needs_fallback(self) -> bool:
        """True once upstream was blocked or unreachable."""
        return self.state in (ProxyState.UPSTREAM_BLOCKED, ProxyState.UPSTREAM_ERROR)

    @property
    def target(self) -> str:
        """Upstream path with the query string re-attached."""
        return f"{self.upstream_path}?{self.query}" if self.query else self.upstream_path
