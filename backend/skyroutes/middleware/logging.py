"""
SkyRoutes Backend - Request Logging Middleware
===============================================

What:  One access log line per request with method, path, query string,
       status, duration and request ID.
Who:   Applied to every request except /health.

Log level by status:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Example:
    2024-01-15T12:00:00 [INFO] skyroutes.access: GET /routes?limit=10 200 4.2ms [1f3a9c2e] from 127.0.0.1
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from skyroutes.middleware.request_id import request_id_var

logger = logging.getLogger("skyroutes.access")

# Probed every few seconds by orchestrators; not worth a log line each
SKIPPED_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration of each handled request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        client_ip = request.client.host if request.client else "unknown"
        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"
        rid = request_id_var.get("")

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            target,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
