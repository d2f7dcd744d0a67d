# tests/test_task_models.py

from __future__ import annotations

import dataclasses

import pytest

from tasklist.tasks.task_models import Task, TaskFilter


def test_copy_helpers_keep_id() -> None:
    task = Task(id=7, description="old")

    edited = task.with_description("new")
    toggled = task.toggled()

    assert edited == Task(id=7, description="new", is_completed=False)
    assert toggled == Task(id=7, description="old", is_completed=True)
    assert task.description == "old"


def test_task_is_immutable() -> None:
    task = Task(id=1, description="x")
    with pytest.raises(dataclasses.FrozenInstanceError):
        task.description = "y"  # type: ignore[misc]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("all", TaskFilter.ALL),
        (" A ", TaskFilter.ALL),
        ("done", TaskFilter.COMPLETED),
        ("Completed", TaskFilter.COMPLETED),
        ("todo", TaskFilter.PENDING),
        ("p", TaskFilter.PENDING),
    ],
)
def test_filter_parse(raw: str, expected: TaskFilter) -> None:
    assert TaskFilter.parse(raw) is expected


def test_filter_parse_rejects_unknown() -> None:
    with pytest.raises(ValueError):
        TaskFilter.parse("someday")


def test_completed_flag() -> None:
    assert TaskFilter.ALL.completed_flag is None
    assert TaskFilter.COMPLETED.completed_flag is True
    assert TaskFilter.PENDING.completed_flag is False
