"""Request logging middleware.

Only the matched route template is logged, never the raw path: admin
identifiers travel in the path and must stay out of the logs.
"""

import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from structlog import get_logger

from ..request_paths import route_template

logger = get_logger()


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs one start and one completion event per request."""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.perf_counter()

        # Routing has not happened yet, so there is no template to log.
        logger.info(
            "request_started",
            request_id=request_id,
            method=request.method,
            client_host=request.client.host if request.client else None,
        )

        response = await call_next(request)

        logger.info(
            "request_completed",
            request_id=request_id,
            method=request.method,
            route=route_template(request),
            status_code=response.status_code,
            duration_seconds=round(time.perf_counter() - start_time, 3),
        )

        response.headers["X-Request-ID"] = request_id
        return response
