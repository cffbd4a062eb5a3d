# Routes package init
"""
Todo API - API Routes Package
==============================

Route Inventory:
    - todos.py:        GET    /api/todos        (list)
                       POST   /api/todos        (create)
                       PATCH  /api/todos/{id}   (toggle completed)
                       DELETE /api/todos/{id}   (delete)
    - health.py:       GET    /health
    - diagnostics.py:  GET    /fail             (raises on purpose; optional)

Routes stay thin: read the request, call one TodoService method, return the
result. Status codes for failures come from the exception handlers in main.py.
"""
