"""Log-safe request paths.

Raw paths carry admin identifiers, which grant control over a stream, so
anything that logs a request uses the matched route template instead.
"""

from starlette.requests import Request

UNMATCHED_ROUTE = "<unmatched>"


def route_template(request: Request) -> str:
    """Path template of the route that handled a request.

    Example:
        ``/{admin_id}/admin`` for ``GET /<admin id>/admin``. Requests that
        matched no route (or have not been routed yet) give ``<unmatched>``.
    """
    route = request.scope.get("route")
    return getattr(route, "path", UNMATCHED_ROUTE)
