"""
Todo API - Todo Service (Business Logic)
=========================================

What:  The four operations the HTTP layer exposes: list, create, toggle, delete.
Why:   Keeps id/timestamp generation, input checks, and not-found policy out of
       the route handlers and out of the store.
How:   Wraps one TodoStore instance and converts stored records into
       TodoResponse schemas on the way out.
Who:   Called by the route handlers in routes/todos.py.

Not-found Policy:
    Unknown ids are not errors here. toggle_todo returns None and delete_todo
    returns {"success": false}; the route decides how to present that.
"""

import logging
import uuid
from typing import Any, List, Optional

from fastapi import Request

from todo_api.config import settings
from todo_api.exceptions import ValidationError
from todo_api.models.todo import Todo, utc_now
from todo_api.schemas.todo import DeleteResponse, TodoResponse
from todo_api.store import TodoStore

logger = logging.getLogger(__name__)


class TodoService:
    """
    Business logic layer for todo operations.

    The service itself is stateless; everything it changes lives in the
    store it was built with. One service wraps one store for the life of
    the app.
    """

    def __init__(self, store: TodoStore, max_text_length: Optional[int] = None):
        self.store = store
        self.max_text_length = max_text_length or settings.todo_text_max_length

    def get_all_todos(self) -> List[TodoResponse]:
        """All todos in creation order. Never fails; empty list when none exist."""
        return [TodoResponse.from_todo(todo) for todo in self.store.list()]

    def add_todo(self, text: Any) -> TodoResponse:
        """
        Create a pending todo with a fresh id and creation time.

        Args:
            text: Label for the todo. Stored exactly as given once it passes
                  validation (no trimming).

        Returns:
            The created todo, `completed` always False.

        Raises:
            ValidationError: text is missing, not a string, blank, or longer
                             than `max_text_length` (→ 400)
        """
        self._validate_text(text)

        todo = Todo(
            id=str(uuid.uuid4()),
            text=text,
            completed=False,
            created_at=utc_now(),
        )
        self.store.insert(todo)
        logger.info("Todo created: %s", todo.id)
        return TodoResponse.from_todo(todo)

    def toggle_todo(self, todo_id: str) -> Optional[TodoResponse]:
        """Flip `completed`; returns None when no todo has that id."""
        todo = self.store.toggle(todo_id)
        if todo is None:
            logger.info("Toggle requested for unknown todo %s", todo_id)
            return None
        logger.info("Todo %s toggled (completed=%s)", todo.id, todo.completed)
        return TodoResponse.from_todo(todo)

    def delete_todo(self, todo_id: str) -> DeleteResponse:
        """Remove a todo; `success` reports whether anything was removed."""
        removed = self.store.remove(todo_id)
        if removed:
            logger.info("Todo deleted: %s", todo_id)
        else:
            logger.info("Delete requested for unknown todo %s", todo_id)
        return DeleteResponse(success=removed)

    # ── Validation ────────────────────────────────────────────────────────

    def _validate_text(self, text: Any) -> None:
        if text is None:
            raise ValidationError(message="Todo text is required", field="text")

        if not isinstance(text, str):
            raise ValidationError(
                message=f"Todo text must be a string, got {type(text).__name__}",
                field="text",
            )

        if not text.strip():
            raise ValidationError(message="Todo text must not be empty", field="text")

        if len(text) > self.max_text_length:
            raise ValidationError(
                message=(
                    f"Todo text is {len(text)} characters long. "
                    f"Maximum allowed: {self.max_text_length}"
                ),
                field="text",
                context={"max_length": self.max_text_length, "length": len(text)},
            )


# ── FastAPI Dependency ────────────────────────────────────────────────────

def get_todo_service(request: Request) -> TodoService:
    """
    Resolve the TodoService owned by the running app.

    Usage:
        @router.get("/todos")
        async def list_todos(service: TodoService = Depends(get_todo_service)):
            ...

    Tests override this with app.dependency_overrides or simply build a new
    app per test, since each create_app() call makes a fresh store.
    """
    return request.app.state.todo_service
