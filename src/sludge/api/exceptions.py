"""Exception handlers for the relay API.

Every failure is answered the same way: status 404 with the error message
as a ``text/plain`` body. Routing misses and unsupported methods on a known
path are reported as an invalid path.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from structlog import get_logger

from ..domain.exceptions import InvalidPath, RelayError
from .request_paths import route_template

logger = get_logger()


def create_error_response(message: str) -> PlainTextResponse:
    """Create the uniform error response."""
    return PlainTextResponse(message, status_code=status.HTTP_404_NOT_FOUND)


async def relay_exception_handler(request: Request, exc: RelayError) -> PlainTextResponse:
    """Handle relay operation failures."""
    logger.info(
        "Request failed",
        error_code=exc.error_code,
        error=exc.message,
        details=exc.details,
        method=request.method,
        route=route_template(request),
    )
    return create_error_response(exc.message)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> PlainTextResponse:
    """Handle Starlette routing and HTTP errors."""
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        message = InvalidPath().message
    else:
        message = str(exc.detail)

    logger.info(
        "Request failed",
        status_code=exc.status_code,
        error=message,
        method=request.method,
        route=route_template(request),
    )
    return create_error_response(message)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> PlainTextResponse:
    """Handle request validation errors."""
    logger.info(
        "Request validation failed",
        fields=[".".join(str(loc) for loc in error["loc"]) for error in exc.errors()],
        method=request.method,
        route=route_template(request),
    )
    return create_error_response("Invalid request")


def setup_exception_handlers(app: FastAPI) -> None:
    """Setup all exception handlers for the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(RelayError, relay_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
