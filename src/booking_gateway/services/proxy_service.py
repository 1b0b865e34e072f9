"""Upstream proxy service for the hotel provider API.

Forwards requests under the proxy base path to the provider, injecting the
provider credentials. The pass-through-or-substitute decision is taken from
the upstream status line alone, before any body bytes are read, so a
substituted response never contains partial upstream data.
"""

from collections.abc import Mapping

import httpx

from booking_gateway.config import Settings, settings
from booking_gateway.entities import FallbackDecision, ProxyRequestContext, ProxyState
from booking_gateway.services.fallback_service import FallbackResolver
from booking_gateway.utils import get_logger

logger = get_logger(__name__)

BLOCKED_STATUS = 451  # Unavailable For Legal Reasons
MARKER_HEADER = "X-Mock-Data"

HOP_BY_HOP_HEADERS = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "te",
        "trailer",
        "trailers",
        "transfer-encoding",
        "upgrade",
    }
)
# Request headers replaced by the proxy or recomputed by httpx.
DROPPED_REQUEST_HEADERS = HOP_BY_HOP_HEADERS | {"host", "content-length", "x-rapidapi-key", "x-rapidapi-host"}
# Body is re-streamed decoded, so length and encoding no longer apply.
DROPPED_RESPONSE_HEADERS = HOP_BY_HOP_HEADERS | {"content-length", "content-encoding", MARKER_HEADER.lower()}


class UpstreamProxy:
    """Reverse proxy to the hotel provider with a single-attempt policy.

    Each request walks the ProxyState machine:
    FORWARDING -> UPSTREAM_OK, or
    FORWARDING -> UPSTREAM_BLOCKED | UPSTREAM_ERROR -> FALLBACK_RESOLVED.

    Example:
        ```python
        proxy = UpstreamProxy.create(client=httpx.AsyncClient(), resolver=resolver)

        context = proxy.new_context("GET", "/api/v1/booking/v1/hotels/search", "dest_id=London")
        response = await proxy.forward(context, headers={}, body=b"")
        if response is None:
            decision = proxy.resolve_fallback(context)
        ```
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        resolver: FallbackResolver,
        upstream_base_url: str,
        upstream_host: str,
        base_path: str,
        api_key: str | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the proxy.

        Args:
            client: Shared async HTTP client (required).
            resolver: Fallback resolver used when upstream fails (required).
            upstream_base_url: Provider origin, e.g. https://booking-com.p.rapidapi.com
            upstream_host: Value for the X-RapidAPI-Host header
            base_path: Inbound prefix removed before forwarding
            api_key: Provider key for the X-RapidAPI-Key header
            timeout: Upstream timeout in seconds. Defaults to settings.
        """
        self._client = client
        self._resolver = resolver
        self._upstream_base_url = upstream_base_url.rstrip("/")
        self._upstream_host = upstream_host
        self._base_path = base_path.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout or settings.upstream_timeout

    @classmethod
    def create(
        cls,
        client: httpx.AsyncClient,
        resolver: FallbackResolver,
        config: Settings | None = None,
    ) -> "UpstreamProxy":
        """Factory method to create UpstreamProxy from settings.

        Args:
            client: Shared async HTTP client.
            resolver: Fallback resolver.
            config: Settings to read upstream details from. If None, uses
                the global settings.

        Returns:
            Configured UpstreamProxy
        """
        config = config or settings
        return cls(
            client=client,
            resolver=resolver,
            upstream_base_url=config.upstream_base_url,
            upstream_host=config.upstream_host,
            base_path=config.proxy_base_path,
            api_key=config.rapidapi_key,
            timeout=config.upstream_timeout,
        )

    def rewrite(self, path: str) -> str:
        """Strip the proxy base path, e.g. /api/v1/booking/v1/locations -> /v1/locations."""
        if path == self._base_path or path.startswith(self._base_path + "/"):
            path = path[len(self._base_path) :]
        return path if path.startswith("/") else "/" + path

    def new_context(self, method: str, path: str, query: str = "") -> ProxyRequestContext:
        """Create the per-request context for an inbound request."""
        return ProxyRequestContext(method=method.upper(), path=path, upstream_path=self.rewrite(path), query=query)

    def outbound_headers(self, inbound: Mapping[str, str]) -> dict[str, str]:
        """Copy inbound headers minus hop-by-hop ones and add provider credentials."""
        headers = {name: value for name, value in inbound.items() if name.lower() not in DROPPED_REQUEST_HEADERS}
        headers["X-RapidAPI-Host"] = self._upstream_host
        if self._api_key:
            headers["X-RapidAPI-Key"] = self._api_key
        return headers

    async def forward(
        self,
        context: ProxyRequestContext,
        headers: Mapping[str, str],
        body: bytes = b"",
    ) -> httpx.Response | None:
        """Send the request upstream once and classify the outcome.

        The upstream body is not read here. On a pass-through the caller
        streams it and must close the response; on 451 the response is
        closed unread.

        Args:
            context: Per-request context in FORWARDING state
            headers: Inbound request headers
            body: Inbound request body

        Returns:
            The open upstream response when it may be passed through,
            None when a fallback is required (context state says why)
        """
        logger.info(f"Proxying {context.method} {context.path} -> {context.target} (query: {context.query or '-'})")

        try:
            request = self._client.build_request(
                context.method,
                f"{self._upstream_base_url}{context.target}",
                headers=self.outbound_headers(headers),
                content=body or None,
                timeout=self._timeout,
            )
            response = await self._client.send(request, stream=True)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Proxy error for {context.target}: {type(e).__name__}: {e}")
            context.transition(ProxyState.UPSTREAM_ERROR)
            return None

        context.upstream_status = response.status_code
        logger.info(f"Received response: {response.status_code} {response.reason_phrase} for {context.target}")

        if response.status_code == BLOCKED_STATUS:
            await response.aclose()
            context.transition(ProxyState.UPSTREAM_BLOCKED)
            return None

        context.transition(ProxyState.UPSTREAM_OK)
        return response

    def resolve_fallback(self, context: ProxyRequestContext) -> FallbackDecision:
        """Pick the substitute body for a blocked or failed request."""
        cause = "regional block (451)" if context.state is ProxyState.UPSTREAM_BLOCKED else "upstream error"
        decision = self._resolver.resolve(context.upstream_path)
        context.decision = decision
        context.transition(ProxyState.FALLBACK_RESOLVED)
        logger.warning(
            f"Using mock data for {context.upstream_path} after {cause}: status {decision.status_code}"
        )
        return decision

    @staticmethod
    def passthrough_headers(response: httpx.Response) -> list[tuple[bytes, bytes]]:
        """Upstream response headers safe to relay, as raw ASGI pairs.

        Repeated headers such as Set-Cookie stay separate entries.
        """
        return [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in response.headers.multi_items()
            if name.lower() not in DROPPED_RESPONSE_HEADERS
        ]

    @property
    def resolver(self) -> FallbackResolver:
        """Get the fallback resolver."""
        return self._resolver

    @property
    def base_path(self) -> str:
        """Get the inbound prefix handled by this proxy."""
        return self._base_path
