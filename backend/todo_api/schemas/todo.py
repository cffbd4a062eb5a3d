"""
Todo API - Pydantic Request/Response Schemas
=============================================

What:  Pydantic models defining the API contract with the todo frontend.
Why:   Input parsing, serialization, and OpenAPI doc generation in one place.
How:   FastAPI uses these models to read request bodies and serialize responses.
       Response fields use Python names internally and camelCase on the wire
       (`created_at` → `createdAt`) to keep the JSON shape the frontend expects.

Design Decision:
    Schemas are separate from the Todo dataclass so the wire format can evolve
    (aliases, extra response fields) without touching what the store holds.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from todo_api.models.todo import Todo


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class TodoCreate(BaseModel):
    """
    Body of POST /api/todos.

    `text` is typed loosely on purpose: presence, type, and length checks live in
    TodoService.add_todo so the HTTP path and direct service callers get the
    same ValidationError.
    """
    text: Optional[Any] = Field(default=None, description="Label for the new todo")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class TodoResponse(BaseModel):
    """
    What:  Wire representation of a todo: `{id, text, completed, createdAt}`.
    Who:   Returned by list, create, and toggle.
    """
    id: str = Field(description="Unique todo identifier (UUID4 string)")
    text: str = Field(description="Todo label as supplied at creation")
    completed: bool = Field(description="Whether the todo has been completed")
    created_at: datetime = Field(
        alias="createdAt",
        description="When the todo was created (UTC ISO 8601)",
    )

    # Build with `created_at=`, read and write `createdAt` on the wire
    model_config = {"populate_by_name": True}

    @classmethod
    def from_todo(cls, todo: Todo) -> "TodoResponse":
        return cls(
            id=todo.id,
            text=todo.text,
            completed=todo.completed,
            created_at=todo.created_at,
        )


class DeleteResponse(BaseModel):
    """Outcome of DELETE /api/todos/{id}; `success` is false for unknown ids."""
    success: bool = Field(description="True if a todo was removed")


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Error body for client errors (400, 429).

    Example:
        {
            "error": "validation_error",
            "message": "Todo text must not be empty",
            "details": {"field": "text"},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class InternalErrorResponse(BaseModel):
    """Body of the generic 500 fallback: `{"error": "Internal Server Error", "message": ...}`."""
    error: str = Field(default="Internal Server Error")
    message: str = Field(description="Description of the failure")


class HealthResponse(BaseModel):
    """Returned by GET /health for liveness probes."""
    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    todo_count: int = Field(description="Number of todos currently held in memory")
    error_reporter: str = Field(description="Active error reporter: sentry or logging")
    uptime_seconds: float = Field(description="Seconds since service started")
