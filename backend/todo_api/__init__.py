"""
Todo API - Application Package Initializer
==========================================

What: Marks the `todo_api` directory as a Python package.
Who:  Used by uvicorn (`uvicorn todo_api.main:app`), pytest, and `python -m todo_api`.

Architecture Note:
    The service follows the same layered layout as the rest of our backends:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │        Services (Business Logic)    │  ← id/timestamp generation, validation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Todo record + Pydantic contracts
    ├─────────────────────────────────────┤
    │         Store (In-Memory State)     │  ← one lock-guarded collection
    └─────────────────────────────────────┘

    Error reporting (Sentry or plain logs) hangs off the side of this stack:
    middleware and exception handlers notify it, the core never does.
"""

__version__ = "1.0.0"
