# tests/test_console_connector.py

from __future__ import annotations

import pytest

from tasklist.connectors.console_connector import handle_line, render_screen
from tasklist.core.state import AppState
from tasklist.tasks.task_controller import TaskListController
from tasklist.tasks.task_models import Task, TaskFilter

from .fakes import InMemoryTaskRepo


def test_render_screen_marks_filter_and_completion() -> None:
    tasks = [Task(id=3, description="write report"), Task(id=9, description="pay rent", is_completed=True)]

    text = render_screen("todo", tasks, TaskFilter.PENDING)

    lines = text.splitlines()
    assert lines[0] == "todo"
    assert "[Pending]" in lines[1]
    assert "[All]" not in lines[1]
    assert "  1. [ ] write report" in lines
    assert "  2. [x] pay rent" in lines


def test_render_screen_empty() -> None:
    assert "(no tasks)" in render_screen("todo", [], TaskFilter.ALL)


@pytest.mark.asyncio
async def test_plain_text_adds_a_task(state: AppState) -> None:
    assert await handle_line(state, "water plants") is None
    assert [t.description for t in state.task_store.query_all()] == ["water plants"]


@pytest.mark.asyncio
async def test_storage_failure_becomes_message(settings) -> None:
    repo = InMemoryTaskRepo()
    controller = TaskListController(repo)
    state = AppState(settings=settings, task_store=repo, controller=controller)
    await controller.add_task("one")
    repo.fail_on.add("query_all")

    reply = await handle_line(state, "/list")

    assert reply is not None
    assert "last loaded state" in reply
    assert [t.description for t in controller.visible_tasks.value] == ["one"]
