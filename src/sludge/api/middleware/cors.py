"""CORS and method policy middleware."""

from typing import Callable, Iterable

from fastapi import Request, Response, status
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

SUPPORTED_METHODS = frozenset({"GET", "POST", "PUT", "DELETE"})


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Stamps CORS headers on every response.

    Preflight ``OPTIONS`` requests are answered here with an empty 200, and
    methods the relay does not serve get a 400 before reaching routing.
    """

    def __init__(
        self,
        app: ASGIApp,
        allow_origin: str = "*",
        allow_methods: Iterable[str] = ("GET", "POST", "PUT", "DELETE", "OPTIONS"),
        allow_headers: Iterable[str] = (),
    ):
        super().__init__(app)
        self.headers = {
            "Access-Control-Allow-Origin": allow_origin,
            "Access-Control-Allow-Methods": ", ".join(allow_methods),
            "Access-Control-Allow-Headers": ", ".join(allow_headers),
        }

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.method == "OPTIONS":
            response = Response(status_code=status.HTTP_200_OK)
        elif request.method not in SUPPORTED_METHODS:
            response = PlainTextResponse(
                "This is not a valid request.",
                status_code=status.HTTP_400_BAD_REQUEST,
            )
        else:
            response = await call_next(request)

        response.headers.update(self.headers)
        return response
