"""
Codeloom Backend - Request Logging Middleware
==============================================

What:  One structured access-log line per HTTP request.
How:   Measures the time spent in the rest of the stack and logs method,
       path, status, duration and request id on the `codeloom.access`
       logger. Level follows the status class: 5xx → ERROR, 4xx → WARNING,
       otherwise INFO.

Only request metadata is logged. Bodies and query strings are never logged
because they can carry PHI.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from codeloom.middleware.request_id import request_id_var

logger = logging.getLogger("codeloom.access")

# Probe endpoints hit every few seconds by Docker and the load balancer
# Why skip them: at that rate they would bury the real traffic in the access
# log, and their failures already show up in the probe result itself
QUIET_PATHS = {"/health", "/api/system/healthz", "/api/system/readyz"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request with timing and correlation id."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        # Why perf_counter: monotonic, unaffected by wall-clock adjustments
        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
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
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "type": "http_request",
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
