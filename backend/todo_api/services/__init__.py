# Services package init
"""
Todo API - Services Layer
==========================

What:  Business logic between the routes (HTTP) and the store (state).

Service Inventory:
    - TodoService: list / create / toggle / delete over one TodoStore

Routes never touch the store directly; they get the app's TodoService through
the `get_todo_service` dependency. That keeps the service testable without
HTTP and lets each app instance own its own store.
"""
