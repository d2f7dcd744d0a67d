# src/tasklist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The controller depends on Protocols instead of concrete implementations.
This keeps the storage swappable and makes testing easier.
"""

from collections.abc import Callable
from typing import Protocol, TypeVar

from ..tasks.task_models import Task

T_contra = TypeVar("T_contra", contravariant=True)


class TaskRepo(Protocol):
    """
    Persistence boundary for Task records.

    Updates/deletes that target a missing id affect zero rows and return 0.
    Any failure is raised as StorageFailure.
    """

    def insert(self, description: str) -> Task: ...
    def update(self, task: Task) -> int: ...
    def delete_one(self, task: Task) -> int: ...
    def delete_all(self) -> int: ...
    def query_all(self) -> list[Task]: ...
    def query_by_status(self, completed: bool) -> list[Task]: ...


class StateObserver(Protocol[T_contra]):
    def __call__(self, value: T_contra) -> None: ...


Unsubscribe = Callable[[], None]
