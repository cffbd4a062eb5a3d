"""
Todo API - Custom Exception Hierarchy
======================================

What:  Application-specific exceptions for the few failures that are real errors.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by the service layer, the store, and middleware.

Exception Hierarchy:
    TodoAPIError (base)          → 500 Internal Server Error (reported)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── DuplicateTodoError       → 500 Internal Server Error (reported)
    └── RateLimitExceededError   → 429 Too Many Requests

Not-found is deliberately absent: toggling or deleting an unknown todo is an
ordinary outcome and is returned as `None` / `{"success": false}`.
"""

from typing import Any, Dict, Optional


class TodoAPIError(Exception):
    """
    Base exception for all Todo API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(TodoAPIError):
    """
    Raised when client input fails validation.

    When:    Missing, non-string, blank, or over-long todo text.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Todo text must not be empty",
            "details": {"field": "text"},
            "request_id": "a1b2c3d4"
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class DuplicateTodoError(TodoAPIError):
    """
    Raised by the store when asked to insert a todo whose id is already live.

    The service generates UUID4 ids, so reaching this means a bug upstream
    rather than bad client input. It is reported like any unhandled failure.
    """

    def __init__(
        self,
        todo_id: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["todo_id"] = todo_id
        super().__init__(message=f"todo with ID '{todo_id}' already exists", context=ctx)
        self.todo_id = todo_id


class RateLimitExceededError(TodoAPIError):
    """
    Raised when a client exceeds the per-IP request rate limit.

    HTTP:    429 Too Many Requests, with a Retry-After header.
    """

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
