"""
Todo API - FastAPI Application Factory
=======================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() builds a fresh store, service, and error
       reporter, wires middleware, exception handlers, and routers, and returns
       the app. `app` at the bottom is what uvicorn serves.
Who:   uvicorn (`uvicorn todo_api.main:app`), `python -m todo_api`, and tests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  app.state:  todo_store → todo_service              │
    │              error_reporter (sentry | logging)      │
    │                                                     │
    │  Middleware: RequestID → Reporting → [RateLimit] →  │
    │              Logging → GZip → CORS                  │
    │                                                     │
    │  Routes:     /api/todos  /health  /fail             │
    │                                                     │
    │  Exception Handlers:                                │
    │    ValidationError→400  other→500                   │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from todo_api import __version__
from todo_api.config import Settings, settings
from todo_api.exceptions import TodoAPIError, ValidationError
from todo_api.middleware.error_reporting import RequestReportingMiddleware, request_event
from todo_api.middleware.logging import RequestLoggingMiddleware
from todo_api.middleware.rate_limit import RateLimitMiddleware
from todo_api.middleware.request_id import RequestIDMiddleware, get_request_id
from todo_api.reporting import ErrorReporter, build_error_reporter
from todo_api.routes import diagnostics, health, todos
from todo_api.services.todo_service import TodoService
from todo_api.store import TodoStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    Called once from the lifespan, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access logger replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:  logging, production config check, "Server running" banner.
    Shutdown: flush the error reporter so queued events are not lost.
    """
    config: Settings = app.state.settings
    setup_logging(config.log_level)

    try:
        config.validate_for_production()
    except ValueError as e:
        # Keep serving; the problems are logged loudly instead
        logger.error("%s", e)

    logger.info(
        "Error reporting: %s (environment=%s)",
        app.state.error_reporter.name,
        config.environment,
    )
    logger.info("Server running on http://%s:%d", config.host, config.port)

    yield

    logger.info("Todo API shutting down (%d todos discarded)", len(app.state.todo_store))
    app.state.error_reporter.flush()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def internal_error_response(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error", "message": message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Handler hierarchy:
        ValidationError         → 400 (client can fix the input)
        RequestValidationError  → 400 (malformed JSON / body shape)
        TodoAPIError (base)     → 500, reported
        Exception (fallback)    → 500, reported

    Every 500 body is {"error": "Internal Server Error", "message": ...}.
    Reporting happens beside the response, never instead of it.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = get_request_id(request)
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = get_request_id(request)
        errors = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
            for err in exc.errors()
        ]
        logger.warning("[%s] Malformed request body: %s", rid, errors)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": "Request body must be a JSON object like {\"text\": \"...\"}",
                "details": {"errors": errors},
                "request_id": rid,
            },
        )

    @app.exception_handler(TodoAPIError)
    async def handle_app_error(request: Request, exc: TodoAPIError):
        logger.error("[%s] %s: %s | Context: %s",
                     get_request_id(request), type(exc).__name__, exc.message, exc.context)
        request.app.state.error_reporter.notify_exception(exc, request_event(request))
        return internal_error_response(exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all for anything the routes did not anticipate, including /fail.

        The reporter gets the exception with its traceback; the client gets the
        exception's own message.
        """
        request.app.state.error_reporter.notify_exception(exc, request_event(request))
        return internal_error_response(str(exc))


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    config: Settings = settings,
    error_reporter: Optional[ErrorReporter] = None,
    store: Optional[TodoStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config:         Settings to use (the process-wide singleton by default)
        error_reporter: Reporter to notify; built from config when omitted
        store:          Store to serve from; a new empty one when omitted

    Each call produces an independent app with its own store, so tests get
    isolation by building one app per test.
    """
    app = FastAPI(
        title="Todo API",
        description="Minimal todo list service: list, create, toggle, and delete todos.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    todo_store = store if store is not None else TodoStore()
    app.state.settings = config
    app.state.todo_store = todo_store
    app.state.todo_service = TodoService(todo_store, max_text_length=config.todo_text_max_length)
    app.state.error_reporter = error_reporter or build_error_reporter(config)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first.
    origins = config.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject credentials with a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    if config.rate_limit_enabled:
        app.add_middleware(
            RateLimitMiddleware,
            max_requests=config.rate_limit_requests,
            window=config.rate_limit_window,
        )
    # Reporting wraps the limiter so rejected requests are still reported
    app.add_middleware(RequestReportingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(todos.router)
    app.include_router(health.router)
    if config.enable_diagnostic_routes:
        app.include_router(diagnostics.router)

    return app


app = create_app()
