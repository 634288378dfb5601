"""
Notefile Backend — Request ID Middleware
=========================================

What:  Tags each request with a short correlation ID and echoes it back.
How:   Reuses an incoming X-Request-ID header or mints an 8-char uuid4
       prefix, stores it in a ContextVar for loggers and exception
       handlers, and sets it on the response.
When:  Outermost application middleware.

Error bodies include the same ID, so a client reporting a failed
request can be matched to the server-side log line that holds the
storage error details.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns and propagates the per-request correlation ID."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
