"""
Todo API - Request ID Middleware
=================================

What:  Gives every request a short correlation ID and echoes it in X-Request-ID.
Why:   Access log lines, validation errors, and reported exceptions for the same
       request can be matched up by that one ID.
When:  Runs before the access logger and the error reporting middleware.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def get_request_id(request: Request) -> str:
    """
    Request ID for `request`, or "" if the middleware has not run.

    Exception handlers registered for `Exception` run in Starlette's outermost
    middleware, outside the context where the ContextVar was set, so
    request.state is checked first.
    """
    return getattr(request.state, "request_id", "") or request_id_var.get("")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        1. Reuse the client's X-Request-ID header when present
        2. Otherwise generate an 8-character UUID prefix
        3. Store it in the ContextVar and in request.state
        4. Add it to the response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
