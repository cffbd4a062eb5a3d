"""
Todo API - Error Reporting
===========================

What:  The observer that receives every inbound request and every unhandled
       exception, separately from the response sent to the client.
Why:   Keeps instrumentation out of the todo logic. Middleware reports requests,
       the fallback exception handler reports failures, and nothing in the
       core knows a reporter exists.
How:   ErrorReporter defines the interface. SentryErrorReporter forwards to
       sentry-sdk (requests become breadcrumbs, exceptions become events);
       LoggingErrorReporter writes both to the application log and is used when
       no SENTRY_DSN is configured.

Fire-and-forget:
    Callers go through `notify_request` / `notify_exception`, which log and
    drop any exception raised by the reporter itself. A broken reporter must
    never turn a 200 into a 500 or hide the original error.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

from todo_api import __version__
from todo_api.config import Settings

logger = logging.getLogger(__name__)


@dataclass
class RequestEvent:
    """What the reporter is told about one request."""
    method: str
    path: str
    request_id: str = ""
    client_ip: str = "unknown"
    extra: Dict[str, Any] = field(default_factory=dict)


class ErrorReporter:
    """Base reporter: does nothing. Subclasses override the hooks they need."""

    name = "none"

    def capture_request(self, event: RequestEvent) -> None:
        pass

    def capture_exception(self, exc: BaseException, event: Optional[RequestEvent] = None) -> None:
        pass

    def flush(self) -> None:
        pass

    # ── Safe entry points used by middleware and handlers ────────────────

    def notify_request(self, event: RequestEvent) -> None:
        try:
            self.capture_request(event)
        except Exception:
            logger.warning(
                "Error reporter %s failed to record request %s %s",
                self.name, event.method, event.path, exc_info=True,
            )

    def notify_exception(self, exc: BaseException, event: Optional[RequestEvent] = None) -> None:
        try:
            self.capture_exception(exc, event)
        except Exception:
            logger.warning(
                "Error reporter %s failed to record %s",
                self.name, type(exc).__name__, exc_info=True,
            )


class LoggingErrorReporter(ErrorReporter):
    """Reports to the application log. Default when Sentry is not configured."""

    name = "logging"

    def capture_request(self, event: RequestEvent) -> None:
        logger.debug("[%s] %s %s from %s", event.request_id, event.method, event.path, event.client_ip)

    def capture_exception(self, exc: BaseException, event: Optional[RequestEvent] = None) -> None:
        where = f"{event.method} {event.path}" if event else "outside a request"
        rid = event.request_id if event else ""
        logger.error(
            "[%s] Unhandled %s during %s: %s",
            rid,
            type(exc).__name__,
            where,
            exc,
            exc_info=(type(exc), exc, exc.__traceback__),
        )


class SentryErrorReporter(ErrorReporter):
    """
    Forwards requests and exceptions to Sentry.

    Requests are recorded as breadcrumbs so an error event carries the trail of
    calls that led to it. Auto-enabling integrations are turned off because
    the FastAPI/Starlette integrations would capture the same 500s a second time.
    The logging integration is kept for breadcrumbs only: `capture_exception`
    is the single source of events, so ERROR log lines written while handling
    a failure (access log, handler log) do not become events of their own.

    Extra keyword arguments are passed through to `sentry_sdk.init`.
    """

    name = "sentry"

    def __init__(
        self,
        dsn: str,
        environment: str = "development",
        traces_sample_rate: float = 0.0,
        **options: Any,
    ):
        sentry_sdk.init(
            dsn=dsn,
            environment=environment,
            release=f"todo-api@{__version__}",
            traces_sample_rate=traces_sample_rate,
            auto_enabling_integrations=False,
            integrations=[LoggingIntegration(level=logging.INFO, event_level=None)],
            send_default_pii=False,
            **options,
        )
        logger.info("Sentry error reporting enabled (environment=%s)", environment)

    def capture_request(self, event: RequestEvent) -> None:
        sentry_sdk.add_breadcrumb(
            category="http.request",
            message=f"{event.method} {event.path}",
            level="info",
            data={"request_id": event.request_id, "client_ip": event.client_ip, **event.extra},
        )

    def capture_exception(self, exc: BaseException, event: Optional[RequestEvent] = None) -> None:
        with sentry_sdk.new_scope() as scope:
            if event is not None:
                scope.set_tag("request_id", event.request_id)
                scope.set_context(
                    "request",
                    {"method": event.method, "path": event.path, "client_ip": event.client_ip},
                )
            sentry_sdk.capture_exception(exc)

    def flush(self) -> None:
        sentry_sdk.flush(timeout=2.0)


def build_error_reporter(config: Settings) -> ErrorReporter:
    """Pick the reporter for this process from configuration."""
    if config.sentry_dsn:
        return SentryErrorReporter(
            dsn=config.sentry_dsn,
            environment=config.environment,
            traces_sample_rate=config.sentry_traces_sample_rate,
        )
    return LoggingErrorReporter()
