# src/tasklist/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum

_FILTER_ALIASES = {
    "all": "all",
    "a": "all",
    "completed": "completed",
    "complete": "completed",
    "done": "completed",
    "c": "completed",
    "pending": "pending",
    "todo": "pending",
    "p": "pending",
}


class TaskFilter(StrEnum):
    """
    Which tasks are visible.

    UI state only: the active filter is never written to the database.
    """

    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"

    @property
    def completed_flag(self) -> bool | None:
        """Value for `query_by_status`, or None when no status filter applies."""
        if self is TaskFilter.COMPLETED:
            return True
        if self is TaskFilter.PENDING:
            return False
        return None

    @classmethod
    def parse(cls, raw: str | None) -> TaskFilter:
        key = (raw or "").strip().lower()
        try:
            return cls(_FILTER_ALIASES[key])
        except KeyError:
            raise ValueError(f"Unknown filter: {raw!r}") from None


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    description: str
    is_completed: bool = False

    def with_description(self, description: str) -> Task:
        return replace(self, description=description)

    def toggled(self) -> Task:
        return replace(self, is_completed=not self.is_completed)
