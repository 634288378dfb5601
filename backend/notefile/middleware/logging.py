"""
Notefile Backend — Request Logging Middleware
==============================================

What:  One access-log line per request on the `notefile.access` logger.
How:   Times the downstream call, then reports the route that handled it.
       The line names the route template (`/notes/{note_id}`) so every
       note id aggregates under one key; the concrete path follows in
       parentheses. The request body is never logged.

Level by status class:
    5xx → ERROR    (notes file unreadable/unwritable, unexpected failure)
    4xx → WARNING  (bad id, bad body, unknown note)
    else → INFO

Example line:
    2024-01-15T12:00:00 [WARNING] notefile.access: GET /notes/{note_id} → 404 in 0.8ms (path=/notes/9 rid=a1b2c3d4 ip=127.0.0.1)
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from notefile.middleware.request_id import request_id_var

logger = logging.getLogger("notefile.access")

UNMATCHED_ROUTE = "<unmatched>"


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def route_template(request: Request) -> str:
    """
    Path template of the route the router matched, e.g. `/notes/{note_id}`.

    The router records the matched route in the shared ASGI scope, so this
    is only meaningful after the downstream call has returned.
    """
    route = request.scope.get("route")
    return getattr(route, "path", UNMATCHED_ROUTE)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access logging keyed by route template; /health is not logged."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path == "/health":
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        fields = {
            "request_id": request_id_var.get(""),
            "method": request.method,
            "route": route_template(request),
            "path": request.url.path,
            "status": response.status_code,
            "duration_ms": round(elapsed_ms, 2),
            "client_ip": request.client.host if request.client else "unknown",
        }
        logger.log(
            level_for_status(response.status_code),
            "%(method)s %(route)s → %(status)d in %(duration_ms).1fms "
            "(path=%(path)s rid=%(request_id)s ip=%(client_ip)s)",
            fields,
            extra=fields,
        )
        return response
