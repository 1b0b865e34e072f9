"""HTTP handlers for the provider proxy and the direct catalog endpoints."""

from collections.abc import AsyncIterator

import httpx
from fastapi import Request, Response
from fastapi.responses import JSONResponse, StreamingResponse
from starlette.background import BackgroundTask

from booking_gateway.entities import FallbackDecision
from booking_gateway.handlers.cache_handler import utc_now
from booking_gateway.services import UpstreamProxy
from booking_gateway.services.proxy_service import MARKER_HEADER
from booking_gateway.utils import get_logger

logger = get_logger(__name__)


def fallback_response(decision: FallbackDecision) -> Response:
    """Build the synthetic response for a fallback decision.

    The response is created from scratch, so no header from the aborted
    upstream exchange (transfer-encoding included) can leak into it.
    """
    return Response(
        content=decision.render(),
        status_code=decision.status_code,
        media_type="application/json",
        headers={MARKER_HEADER: "true"},
    )


async def _relay(response: httpx.Response, target: str) -> AsyncIterator[bytes]:
    try:
        async for chunk in response.aiter_bytes():
            yield chunk
    except httpx.HTTPError as e:
        # status line already sent; the client sees a truncated body
        logger.error(f"Upstream stream for {target} broke off: {type(e).__name__}: {e}")


class ProxyHandler:
    """HTTP handlers for proxied provider calls.

    Example:
        ```python
        handler = ProxyHandler(proxy=proxy)

        @router.api_route("/{path:path}", methods=["GET", "POST"])
        async def forward(request: Request):
            return await handler.proxy(request)
        ```
    """

    def __init__(self, proxy: UpstreamProxy) -> None:
        """Initialize the proxy handler.

        Args:
            proxy: The upstream proxy service (required).
        """
        self._proxy = proxy

    async def proxy(self, request: Request) -> Response:
        """Forward a request upstream, substituting canned data on 451 or transport failure.

        Returns:
            The streamed upstream response, or a JSON fallback response with
            the marker header. If building the fallback itself fails, a JSON
            502 body is returned instead of dropping the connection.
        """
        context = self._proxy.new_context(request.method, request.url.path, request.url.query)

        try:
            body = await request.body()
            upstream = await self._proxy.forward(context, request.headers, body)

            if upstream is not None:
                response = StreamingResponse(
                    _relay(upstream, context.target),
                    status_code=upstream.status_code,
                    background=BackgroundTask(upstream.aclose),
                )
                response.raw_headers.extend(self._proxy.passthrough_headers(upstream))
                return response

            return fallback_response(self._proxy.resolve_fallback(context))
        except Exception as e:
            logger.exception(f"Proxy failed for {context.path} in state {context.state.value}")
            return JSONResponse(
                status_code=502,
                content={
                    "success": False,
                    "error": "Proxy Error",
                    "message": str(e) or type(e).__name__,
                    "timestamp": utc_now(),
                },
            )

    async def direct_hotel_search(self) -> Response:
        """Handle GET <base>/direct/hotels/search without contacting upstream."""
        return fallback_response(self._proxy.resolver.hotel_search())

    async def direct_hotel_details(self, hotel_id: str) -> Response:
        """Handle GET <base>/direct/hotels/{hotel_id} without contacting upstream."""
        return fallback_response(self._proxy.resolver.hotel_details(hotel_id))

    async def direct_locations(self) -> Response:
        """Handle GET <base>/direct/locations without contacting upstream."""
        return fallback_response(self._proxy.resolver.locations())
