"""
Todo API - In-Memory Todo Store
================================

What:  The authoritative, ordered collection of todos for one app instance.
Why:   Keeps all mutable state behind one object so the app factory can own it
       and tests can build isolated instances.
How:   A dict keyed by id (insertion ordered, O(1) lookup) guarded by a
       threading.Lock. Records are frozen dataclasses, so handing one to a
       caller never exposes a live reference into the store.
Who:   Constructed by create_app() and stored on `app.state.todo_store`;
       used only through TodoService.
When:  Lives for the lifetime of the process. Nothing is persisted; a restart
       starts from an empty list.

Thread Safety:
    The todo routes are `async def`, so HTTP traffic reaches the store from the
    event loop only. The lock covers everything else: sync callers on other
    threads (scripts, tests, the service used directly) and handlers switched
    to `def`, which FastAPI runs on a worker thread pool. Every read and write
    takes the same lock, which gives at-most-one-mutation-at-a-time semantics.
"""

import logging
import threading
from typing import Dict, List, Optional

from todo_api.exceptions import DuplicateTodoError
from todo_api.models.todo import Todo

logger = logging.getLogger(__name__)


class TodoStore:
    """
    Ordered in-memory collection of Todo records.

    Operations:
        list()       → all todos, insertion order
        insert(todo) → append; duplicate ids raise DuplicateTodoError
        find(id)     → todo or None
        toggle(id)   → flipped todo or None, in one locked step
        remove(id)   → whether a todo was removed
    """

    def __init__(self) -> None:
        self._todos: Dict[str, Todo] = {}
        self._lock = threading.Lock()

    def list(self) -> List[Todo]:
        with self._lock:
            return list(self._todos.values())

    def insert(self, todo: Todo) -> None:
        """
        Append a fully constructed todo.

        Raises:
            DuplicateTodoError: a live todo already uses `todo.id`
        """
        with self._lock:
            if todo.id in self._todos:
                raise DuplicateTodoError(todo.id)
            self._todos[todo.id] = todo
        logger.debug("Inserted todo %s", todo.id)

    def find(self, todo_id: str) -> Optional[Todo]:
        with self._lock:
            return self._todos.get(todo_id)

    def toggle(self, todo_id: str) -> Optional[Todo]:
        """
        Flip `completed` on the todo with `todo_id`.

        Lookup and replacement happen under one lock acquisition so two
        concurrent toggles always net out to zero. Reassigning an existing
        dict key keeps its position, so list order is unchanged.
        """
        with self._lock:
            current = self._todos.get(todo_id)
            if current is None:
                return None
            updated = current.toggled()
            self._todos[todo_id] = updated
        logger.debug("Toggled todo %s (completed=%s)", todo_id, updated.completed)
        return updated

    def remove(self, todo_id: str) -> bool:
        with self._lock:
            removed = self._todos.pop(todo_id, None) is not None
        if removed:
            logger.debug("Removed todo %s", todo_id)
        return removed

    def clear(self) -> None:
        with self._lock:
            self._todos.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._todos)
