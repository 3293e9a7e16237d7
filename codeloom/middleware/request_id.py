"""
Codeloom Backend - Request ID Middleware
=========================================

What:  Assigns an id to each request and returns it in X-Request-ID.
Why:   Every log line and every error body of a request carries the same id,
       so a support ticket quoting it leads straight to the server logs.
How:   Uses the client's X-Request-ID header when present, otherwise a short
       uuid4 prefix. The id is stored in a ContextVar for loggers and error
       handlers, and in request.state for route handlers.
Who:   Applied to every request; sits just inside MetricsMiddleware.

Unexpected errors:
    Starlette runs the app's `Exception` handler in ServerErrorMiddleware,
    the outermost layer. By then this middleware has already unwound: the
    ContextVar is reset and no middleware is left to add the header.
    Exceptions escaping the rest of the stack are therefore answered here
    with the generic 500 body, id included.
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

# Coroutine-local storage for the current request id
# Why ContextVar: concurrent requests share one thread; each coroutine needs
# its own value
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred. Please try again or contact support."


def internal_error_response(rid: str) -> JSONResponse:
    """The generic 500 body. Exception details never leave the server."""
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": INTERNAL_ERROR_MESSAGE,
            "request_id": rid,
        },
        headers={REQUEST_ID_HEADER: rid} if rid else None,
    )


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns a correlation id to each request.

    Behavior:
        1. Reuse the client's X-Request-ID if it sent one (frontend tracing)
        2. Otherwise generate an 8-character id
        3. Expose it through request_id_var and request.state.request_id
        4. Echo it in the response header, error responses included
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # Why 8 chars: enough to correlate within a log window, short enough to read
        rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error("[%s] Unexpected error: %s", rid, str(e), exc_info=True)
            return internal_error_response(rid)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
