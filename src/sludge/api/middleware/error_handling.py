"""Error handling middleware.

Catches anything that escaped the exception handlers and answers it in the
relay's uniform error shape.
"""

from typing import Callable

from fastapi import Request, Response
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware
from structlog import get_logger

from ..exceptions import create_error_response
from ..request_paths import route_template

logger = get_logger()


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Turns unhandled exceptions into ``404 text/plain`` responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return self._handle_exception(request, exc)

    def _handle_exception(self, request: Request, exc: Exception) -> PlainTextResponse:
        logger.error(
            "Unhandled exception",
            exception_type=type(exc).__name__,
            method=request.method,
            route=route_template(request),
            client_ip=self._get_client_ip(request),
            exc_info=True,
        )

        message = getattr(exc, "message", None) or str(exc) or type(exc).__name__
        return create_error_response(message)

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP address, honoring the reverse proxy headers."""
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip

        return request.client.host if request.client else "unknown"
