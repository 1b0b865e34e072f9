"""Response-cache middleware for GET routes.

Plain ASGI middleware rather than a BaseHTTPMiddleware subclass, so
streamed proxy responses keep flowing chunk by chunk while a copy of the
body is collected for the store.
"""

import json

from starlette.datastructures import Headers
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from booking_gateway.services import CacheService
from booking_gateway.services.proxy_service import MARKER_HEADER
from booking_gateway.utils import get_logger

logger = get_logger(__name__)


def is_cacheable(start: Message) -> bool:
    """Only plain 200 JSON responses that came from a real upstream are cached."""
    if start.get("status") != 200:
        return False
    headers = Headers(raw=start.get("headers", []))
    if headers.get(MARKER_HEADER, "").lower() == "true":
        return False
    return headers.get("content-type", "").split(";")[0].strip().lower() == "application/json"


class ResponseCacheMiddleware:
    """Cache JSON bodies of GET responses under ``cache:<path>?<query>``.

    - Non-GET requests pass straight through.
    - A hit is answered from the store without calling the app.
    - On a miss, every message is forwarded unchanged; the body is written
      to the store just before the final chunk is sent.

    The CacheService is looked up on ``app.state.cache_service`` at request
    time, so the middleware can be registered before the lifespan runs.
    """

    def __init__(self, app: ASGIApp, ttl: int, paths: tuple[str, ...] = ()) -> None:
        """Initialize the middleware.

        Args:
            app: The wrapped ASGI application
            ttl: Lifetime of cached responses in seconds; 0 disables caching
            paths: Path prefixes the cache applies to; empty means none
        """
        self.app = app
        self.ttl = ttl
        self.paths = tuple(path.rstrip("/") for path in paths)

    def applies_to(self, path: str) -> bool:
        """Check whether a request path falls under a cached prefix."""
        return any(path == prefix or path.startswith(prefix + "/") for prefix in self.paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["method"] != "GET" or self.ttl <= 0:
            await self.app(scope, receive, send)
            return

        path = scope["path"]
        cache: CacheService | None = getattr(scope["app"].state, "cache_service", None) if "app" in scope else None
        if cache is None or not self.applies_to(path):
            await self.app(scope, receive, send)
            return

        key = CacheService.response_key(path, scope.get("query_string", b"").decode("latin-1"))

        cached = await cache.get_response(key)
        if cached is not None:
            logger.debug(f"Serving cached response for {key}")
            await Response(cached, media_type="application/json")(scope, receive, send)
            return

        start: Message = {}
        chunks: list[bytes] = []

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                start.update(message)
            elif message["type"] == "http.response.body" and is_cacheable(start):
                chunks.append(message.get("body", b""))
                if not message.get("more_body", False):
                    await self._store(cache, key, b"".join(chunks))
            await send(message)

        await self.app(scope, receive, send_wrapper)

    async def _store(self, cache: CacheService, key: str, body: bytes) -> None:
        # an upstream stream that broke off still ends with a final empty chunk
        try:
            text = body.decode("utf-8")
            json.loads(text)
        except ValueError as e:
            logger.warning(f"Not caching incomplete or invalid JSON body for {key}: {e}")
            return
        if await cache.store_response(key, self.ttl, text):
            logger.debug(f"Cached response for {key} ({len(body)} bytes, ttl {self.ttl}s)")
