"""
Todo API - Error Reporting Tests
=================================

What:  The fallback 500 path, request reporting, and both reporter implementations.
How:   Route tests use the RecordingErrorReporter from conftest; Sentry tests
       patch `sentry_sdk` so nothing leaves the process, except the event
       counting test, which runs the real SDK and drops events in before_send.
"""

import logging
import uuid
from unittest.mock import patch

import pytest
import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

from todo_api.config import Settings
from todo_api.reporting import (
    ErrorReporter,
    LoggingErrorReporter,
    RequestEvent,
    SentryErrorReporter,
    build_error_reporter,
)
from todo_api.routes.diagnostics import FAIL_MESSAGE


class TestFallbackHandler:

    @pytest.mark.asyncio
    async def test_fail_route_returns_generic_500(self, test_client):
        response = await test_client.get("/fail")

        assert response.status_code == 500
        assert response.json() == {
            "error": "Internal Server Error",
            "message": FAIL_MESSAGE,
        }

    @pytest.mark.asyncio
    async def test_fail_route_reports_exception(self, test_client, recording_reporter):
        await test_client.get("/fail", headers={"X-Request-ID": "trace-me"})

        assert len(recording_reporter.exceptions) == 1
        exc, event = recording_reporter.exceptions[0]
        assert isinstance(exc, RuntimeError)
        assert str(exc) == FAIL_MESSAGE
        assert event.path == "/fail"
        assert event.method == "GET"
        assert event.request_id == "trace-me"

    @pytest.mark.asyncio
    async def test_store_invariant_violation_is_reported(self, test_client, recording_reporter):
        """A duplicate id from the generator surfaces as a reported 500."""
        fixed = uuid.UUID("12345678-1234-5678-1234-567812345678")
        with patch("todo_api.services.todo_service.uuid.uuid4", return_value=fixed):
            first = await test_client.post("/api/todos", json={"text": "a"})
            second = await test_client.post("/api/todos", json={"text": "b"})

        assert first.status_code == 200
        assert second.status_code == 500
        assert second.json()["error"] == "Internal Server Error"
        assert str(fixed) in second.json()["message"]
        assert len(recording_reporter.exceptions) == 1

    @pytest.mark.asyncio
    async def test_diagnostic_route_can_be_disabled(self, recording_reporter):
        from httpx import AsyncClient, ASGITransport
        from todo_api.main import create_app

        app = create_app(
            config=Settings(enable_diagnostic_routes=False),
            error_reporter=recording_reporter,
        )
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/fail")

        assert response.status_code == 404
        assert recording_reporter.exceptions == []


class TestRequestReporting:

    @pytest.mark.asyncio
    async def test_every_request_is_reported(self, test_client, recording_reporter):
        await test_client.get("/api/todos")
        await test_client.post("/api/todos", json={"text": "x"})
        await test_client.patch("/api/todos/unknown")

        seen = [(e.method, e.path) for e in recording_reporter.requests]
        assert seen == [
            ("GET", "/api/todos"),
            ("POST", "/api/todos"),
            ("PATCH", "/api/todos/unknown"),
        ]

    @pytest.mark.asyncio
    async def test_client_errors_are_not_reported_as_exceptions(self, test_client, recording_reporter):
        await test_client.post("/api/todos", json={})
        assert recording_reporter.exceptions == []

    @pytest.mark.asyncio
    async def test_broken_reporter_does_not_change_responses(self, recording_reporter):
        from httpx import AsyncClient, ASGITransport
        from todo_api.main import create_app

        class BrokenReporter(ErrorReporter):
            def capture_request(self, event):
                raise ConnectionError("collector down")

            def capture_exception(self, exc, event=None):
                raise ConnectionError("collector down")

        app = create_app(error_reporter=BrokenReporter())
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            ok = await client.get("/api/todos")
            failed = await client.get("/fail")

        assert ok.status_code == 200
        assert failed.status_code == 500
        assert failed.json()["message"] == FAIL_MESSAGE


class TestLoggingErrorReporter:

    def test_capture_exception_logs_error(self, caplog):
        reporter = LoggingErrorReporter()
        event = RequestEvent(method="GET", path="/fail", request_id="abc")

        with caplog.at_level(logging.ERROR, logger="todo_api.reporting"):
            reporter.capture_exception(RuntimeError("boom"), event)

        assert "Unhandled RuntimeError during GET /fail: boom" in caplog.text

    def test_capture_exception_without_request(self, caplog):
        reporter = LoggingErrorReporter()

        with caplog.at_level(logging.ERROR, logger="todo_api.reporting"):
            reporter.capture_exception(ValueError("bad"))

        assert "outside a request" in caplog.text


@pytest.fixture
def real_sentry():
    """Lets a test initialise the real SDK, then disables it again."""
    yield
    sentry_sdk.get_client().close(timeout=0)
    sentry_sdk.init()


class TestSentryErrorReporter:

    DSN = "https://public@example.ingest.sentry.io/1"

    def test_init_configures_sdk(self):
        with patch("todo_api.reporting.sentry_sdk") as mock_sdk:
            SentryErrorReporter(dsn=self.DSN, environment="staging", traces_sample_rate=0.5)

        kwargs = mock_sdk.init.call_args.kwargs
        assert kwargs["dsn"] == self.DSN
        assert kwargs["environment"] == "staging"
        assert kwargs["traces_sample_rate"] == 0.5
        assert kwargs["auto_enabling_integrations"] is False
        [logging_integration] = kwargs["integrations"]
        assert isinstance(logging_integration, LoggingIntegration)

    def test_error_logs_do_not_become_events(self, real_sentry):
        """Only capture_exception produces an event; ERROR log lines stay breadcrumbs."""
        events = []

        def collect(event, hint):
            events.append(event)
            return None

        reporter = SentryErrorReporter(dsn=self.DSN, before_send=collect, send_client_reports=False)
        event = RequestEvent(method="GET", path="/fail", request_id="r3")

        logging.getLogger("todo_api.main").error("[r3] RuntimeError: boom")
        logging.getLogger("todo_api.access").error("GET /fail 500")
        reporter.capture_exception(RuntimeError("boom"), event)

        assert len(events) == 1
        assert events[0]["tags"]["request_id"] == "r3"
        crumbs = [c["message"] for c in events[0]["breadcrumbs"]["values"]]
        assert "GET /fail 500" in crumbs

    def test_capture_request_adds_breadcrumb(self):
        with patch("todo_api.reporting.sentry_sdk") as mock_sdk:
            reporter = SentryErrorReporter(dsn=self.DSN)
            reporter.capture_request(RequestEvent(method="POST", path="/api/todos", request_id="r1"))

        crumb = mock_sdk.add_breadcrumb.call_args.kwargs
        assert crumb["category"] == "http.request"
        assert crumb["message"] == "POST /api/todos"
        assert crumb["data"]["request_id"] == "r1"

    def test_capture_exception_tags_request(self):
        exc = RuntimeError("boom")
        with patch("todo_api.reporting.sentry_sdk") as mock_sdk:
            reporter = SentryErrorReporter(dsn=self.DSN)
            reporter.capture_exception(exc, RequestEvent(method="GET", path="/fail", request_id="r2"))

        scope = mock_sdk.new_scope.return_value.__enter__.return_value
        scope.set_tag.assert_called_once_with("request_id", "r2")
        mock_sdk.capture_exception.assert_called_once_with(exc)

    def test_flush(self):
        with patch("todo_api.reporting.sentry_sdk") as mock_sdk:
            SentryErrorReporter(dsn=self.DSN).flush()

        mock_sdk.flush.assert_called_once()


class TestBuildErrorReporter:

    def test_no_dsn_uses_logging(self):
        reporter = build_error_reporter(Settings(sentry_dsn=""))
        assert isinstance(reporter, LoggingErrorReporter)
        assert reporter.name == "logging"

    def test_dsn_uses_sentry(self):
        with patch("todo_api.reporting.sentry_sdk"):
            reporter = build_error_reporter(Settings(sentry_dsn=TestSentryErrorReporter.DSN))
        assert isinstance(reporter, SentryErrorReporter)
