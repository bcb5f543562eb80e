"""
SkyRoutes Backend - Request ID Middleware
==========================================

What:  Tags each request with a short correlation ID and returns it in the
       X-Request-ID response header.
How:   Reuses a client-supplied X-Request-ID, otherwise generates one, and
       stores it in a ContextVar that log calls and error handlers read.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Assigns a request ID, exposes it as `request.state.request_id` and echoes
    it back in the response headers.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)

        response.headers["X-Request-ID"] = rid
        return response
