"""
Todo API - Diagnostic Routes
=============================

What:  GET /fail, which always raises.
Why:   Lets an operator confirm end to end that unhandled errors reach the
       error reporter and come back as the generic 500 body.
When:  Mounted only when ENABLE_DIAGNOSTIC_ROUTES is true.
"""

from fastapi import APIRouter

from todo_api.schemas.todo import InternalErrorResponse

router = APIRouter(tags=["Diagnostics"])

FAIL_MESSAGE = "This is a test error from the /fail endpoint"


@router.get(
    "/fail",
    responses={500: {"description": "Always", "model": InternalErrorResponse}},
    summary="Raise an unhandled error on purpose",
)
async def fail() -> None:
    raise RuntimeError(FAIL_MESSAGE)
