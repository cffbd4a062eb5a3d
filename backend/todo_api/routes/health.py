"""
Todo API - Health Check Route
==============================

What:  Liveness endpoint for container and load balancer probes.
How:   The only dependency is in-process memory, so "healthy" means the app is
       serving; the body adds a few numbers useful when eyeballing a deployment.
"""

import logging
import time

from fastapi import APIRouter, Request

from todo_api import __version__
from todo_api.schemas.todo import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Set once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    state = request.app.state
    return HealthResponse(
        status="healthy",
        version=__version__,
        todo_count=len(state.todo_store),
        error_reporter=state.error_reporter.name,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
