"""
Todo API - Todo Route Handlers
===============================

What:  GET/POST /api/todos and PATCH/DELETE /api/todos/{id}.
How:   Each handler makes exactly one TodoService call and returns its result.
Who:   Called by the todo frontend.

Response shapes are kept compatible with the existing frontend:
    - every success is HTTP 200
    - PATCH of an unknown id returns 200 with a JSON `null` body
    - DELETE always returns `{"success": bool}`
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends

from todo_api.schemas.todo import (
    DeleteResponse,
    ErrorResponse,
    TodoCreate,
    TodoResponse,
)
from todo_api.services.todo_service import TodoService, get_todo_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Todos"])


@router.get(
    "/todos",
    response_model=List[TodoResponse],
    summary="List all todos",
)
async def list_todos(
    service: TodoService = Depends(get_todo_service),
) -> List[TodoResponse]:
    """All todos in the order they were created."""
    return service.get_all_todos()


@router.post(
    "/todos",
    response_model=TodoResponse,
    responses={
        200: {"description": "The created todo", "model": TodoResponse},
        400: {"description": "Missing or invalid text", "model": ErrorResponse},
    },
    summary="Create a todo",
)
async def create_todo(
    body: TodoCreate,
    service: TodoService = Depends(get_todo_service),
) -> TodoResponse:
    """
    Create a pending todo from `{"text": ...}`.

    The id and createdAt are generated server-side. Validation failures are
    raised by the service as ValidationError and become a 400.
    """
    return service.add_todo(body.text)


@router.patch(
    "/todos/{todo_id}",
    response_model=Optional[TodoResponse],
    summary="Toggle a todo's completed flag",
    description="Returns the updated todo, or `null` if no todo has this id.",
)
async def toggle_todo(
    todo_id: str,
    service: TodoService = Depends(get_todo_service),
) -> Optional[TodoResponse]:
    return service.toggle_todo(todo_id)


@router.delete(
    "/todos/{todo_id}",
    response_model=DeleteResponse,
    summary="Delete a todo",
    description="`success` is false when no todo has this id; that is not an error.",
)
async def delete_todo(
    todo_id: str,
    service: TodoService = Depends(get_todo_service),
) -> DeleteResponse:
    return service.delete_todo(todo_id)
