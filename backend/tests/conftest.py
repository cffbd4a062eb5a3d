"""
Todo API - Test Configuration (conftest.py)
============================================

What:  Shared pytest fixtures for the entire test suite.
How:   Environment overrides are applied before the package is imported, then
       every test gets its own store, service, and app so nothing leaks
       between tests.

Fixtures:
    ├── store:               Empty TodoStore
    ├── service:             TodoService over `store`
    ├── recording_reporter:  ErrorReporter that keeps what it was told
    ├── test_app:            create_app() wired to the recording reporter
    └── test_client:         HTTPX AsyncClient for the test app
"""

import os

# Override settings for testing BEFORE any package imports
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["SENTRY_DSN"] = ""
os.environ["ENVIRONMENT"] = "test"

from typing import List, Optional, Tuple

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from todo_api.reporting import ErrorReporter, RequestEvent
from todo_api.services.todo_service import TodoService
from todo_api.store import TodoStore


class RecordingErrorReporter(ErrorReporter):
    """Keeps every request and exception it receives, for assertions."""

    name = "recording"

    def __init__(self):
        self.requests: List[RequestEvent] = []
        self.exceptions: List[Tuple[BaseException, Optional[RequestEvent]]] = []
        self.flushed = False

    def capture_request(self, event: RequestEvent) -> None:
        self.requests.append(event)

    def capture_exception(self, exc: BaseException, event: Optional[RequestEvent] = None) -> None:
        self.exceptions.append((exc, event))

    def flush(self) -> None:
        self.flushed = True


@pytest.fixture
def store():
    return TodoStore()


@pytest.fixture
def service(store):
    return TodoService(store)


@pytest.fixture
def recording_reporter():
    return RecordingErrorReporter()


@pytest.fixture
def test_app(recording_reporter):
    from todo_api.main import create_app
    return create_app(error_reporter=recording_reporter)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient routed straight into the app (no server).

    raise_app_exceptions=False lets tests see the 500 response produced by the
    fallback handler instead of the re-raised exception.
    """
    transport = ASGITransport(app=test_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
