"""
Codeloom Backend - Request Metrics Middleware
==============================================

What:  In-memory counters: total requests, total 5xx responses and 5xx
       responses per route path.
Who:   Read by GET /api/system/metrics.

Counters are per process. With several workers each worker reports its
own numbers.
"""

import logging
from collections import defaultdict
from typing import Any, Dict

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)


class RequestMetrics:
    """Mutable counter store shared by the middleware and the metrics route."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.total_requests = 0
        self.total_5xx = 0
        self.per_route_5xx: Dict[str, int] = defaultdict(int)

    def record_request(self) -> None:
        self.total_requests += 1

    def record_status(self, path: str, status_code: int) -> None:
        if status_code >= 500:
            self.total_5xx += 1
            self.per_route_5xx[path] += 1

    def snapshot(self) -> Dict[str, Any]:
        """A copy of the counters; later requests do not change it."""
        return {
            "total_requests": self.total_requests,
            "total_5xx": self.total_5xx,
            "per_route_5xx": dict(self.per_route_5xx),
        }


metrics = RequestMetrics()


def get_metrics() -> Dict[str, Any]:
    return metrics.snapshot()


class MetricsMiddleware(BaseHTTPMiddleware):
    """
    Counts every request and every 5xx response.

    An exception escaping the app is counted as a 5xx before it propagates.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # Why url.path: the query string is dropped so per-route counts do not
        # fan out over every parameter combination
        path = request.url.path
        metrics.record_request()
        try:
            response = await call_next(request)
        except Exception:
            # RequestIDMiddleware answers route errors itself; this only sees
            # failures in the middleware layers in between
            metrics.record_status(path, 500)
            raise
        metrics.record_status(path, response.status_code)
        return response
