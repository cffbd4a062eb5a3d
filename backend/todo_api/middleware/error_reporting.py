"""
Todo API - Request Reporting Middleware
========================================

What:  Tells the app's ErrorReporter about every inbound request before it is routed.
Why:   With Sentry, these become breadcrumbs, so an error event shows the
       requests that preceded it. Exceptions themselves are reported by the
       fallback handler in main.py, not here.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from todo_api.middleware.logging import client_ip_of
from todo_api.middleware.request_id import get_request_id
from todo_api.reporting import RequestEvent


def request_event(request: Request) -> RequestEvent:
    return RequestEvent(
        method=request.method,
        path=request.url.path,
        request_id=get_request_id(request),
        client_ip=client_ip_of(request),
    )


class RequestReportingMiddleware(BaseHTTPMiddleware):
    """Reads the reporter from `request.app.state.error_reporter` on each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        reporter = request.app.state.error_reporter
        reporter.notify_request(request_event(request))
        return await call_next(request)
