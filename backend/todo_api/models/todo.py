"""
Todo API - Todo Record
=======================

What:  The single domain entity held by the store.
Why:   A frozen dataclass keeps id, text, and created_at immutable for the
       lifetime of the record; toggling builds a new value via `toggled()`.
Who:   Created by TodoService, owned by TodoStore, converted to TodoResponse
       at the service boundary.

Lifecycle:
    1. Created by TodoService.add_todo (id and created_at generated server-side)
    2. Flipped between pending and completed by TodoStore.toggle
    3. Dropped by TodoStore.remove; nothing revives a removed id
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Todo:
    """A single task with a two-state completion flag."""

    id: str
    text: str
    completed: bool = False
    # Timezone-aware UTC so serialized values carry an explicit offset
    created_at: datetime = field(default_factory=utc_now)

    def toggled(self) -> "Todo":
        """Return a copy with `completed` flipped; identity fields are kept."""
        return replace(self, completed=not self.completed)

    def __repr__(self) -> str:
        return (
            f"<Todo(id={self.id}, completed={self.completed}, "
            f"created_at='{self.created_at.isoformat()}')>"
        )
