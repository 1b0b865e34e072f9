"""Exception handlers rendering the ``{success: false, error, message}`` envelope."""

from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from booking_gateway.dto import ErrorResponse
from booking_gateway.handlers.cache_handler import utc_now
from booking_gateway.utils import get_logger

logger = get_logger(__name__)


def error_response(status_code: int, error: str, message: str) -> JSONResponse:
    """Build a JSON error response with the standard envelope."""
    body = ErrorResponse(error=error, message=message, timestamp=utc_now())
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTPException, turning router 404s into 'Route ... not found'."""
    phrase = HTTPStatus(exc.status_code).phrase
    message = str(exc.detail)
    if exc.status_code == 404 and exc.detail == phrase:
        url = request.url.path + (f"?{request.url.query}" if request.url.query else "")
        message = f"Route {url} not found"
    return error_response(exc.status_code, phrase, message)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    return error_response(422, "Validation Error", details)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler for anything the handlers did not catch."""
    logger.opt(exception=exc).error(f"Server error on {request.method} {request.url.path}: {exc}")
    return error_response(500, "Server Error", str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error envelope handlers on an app."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
