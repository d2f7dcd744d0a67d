# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklist.core.state import AppState
from tasklist.tasks.task_controller import TaskListController
from tasklist.tasks.task_models import Task, TaskFilter
from tasklist.tasks.task_store import TaskStore

from .fakes import InMemoryTaskRepo


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI modules.

    We use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="tasklist-test",
        log_level="DEBUG",
        default_filter=TaskFilter.ALL,
        clear_screen=False,
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.tasks_db_path)


@pytest.fixture()
def seeded_store(store: TaskStore) -> TaskStore:
    """Five tasks, the 2nd and 4th completed."""
    for i in range(1, 6):
        task = store.insert(f"task {i}")
        if i in (2, 4):
            store.update(Task(id=task.id, description=task.description, is_completed=True))
    return store


@pytest.fixture()
def controller(store: TaskStore) -> TaskListController:
    return TaskListController(store)


@pytest.fixture()
def fake_repo() -> InMemoryTaskRepo:
    return InMemoryTaskRepo()


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, controller: TaskListController) -> AppState:
    """
    AppState wired with the real SQLite store: its behaviour is part of
    what the command tests check.
    """
    return AppState(settings=settings, task_store=store, controller=controller)
