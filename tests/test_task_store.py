# tests/test_task_store.py

from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from tasklist.tasks.task_models import Task
from tasklist.tasks.task_store import StorageFailure, TaskStore


def test_insert_assigns_ids_and_defaults(store: TaskStore) -> None:
    a = store.insert("buy milk")
    b = store.insert("walk the dog")

    assert a.id > 0
    assert b.id != a.id
    assert a.is_completed is False
    assert store.count_tasks() == 2


def test_query_all_keeps_insertion_order(store: TaskStore) -> None:
    for d in ("one", "two", "three"):
        store.insert(d)

    assert [t.description for t in store.query_all()] == ["one", "two", "three"]


def test_update_replaces_fields_by_id(store: TaskStore) -> None:
    task = store.insert("draft")

    rows = store.update(Task(id=task.id, description="final", is_completed=True))

    assert rows == 1
    (stored,) = store.query_all()
    assert stored == Task(id=task.id, description="final", is_completed=True)


def test_query_by_status(seeded_store: TaskStore) -> None:
    done = seeded_store.query_by_status(True)
    pending = seeded_store.query_by_status(False)

    assert [t.description for t in done] == ["task 2", "task 4"]
    assert [t.description for t in pending] == ["task 1", "task 3", "task 5"]


def test_missing_id_is_a_noop(store: TaskStore) -> None:
    task = store.insert("gone soon")
    assert store.delete_one(task) == 1

    assert store.update(task.toggled()) == 0
    assert store.delete_one(task) == 0
    assert store.query_all() == []


def test_delete_all(seeded_store: TaskStore) -> None:
    assert seeded_store.delete_all() == 5
    assert seeded_store.query_all() == []
    assert seeded_store.delete_all() == 0


def test_data_survives_reopen(tmp_path: Path) -> None:
    db = tmp_path / "tasks.sqlite3"
    TaskStore(db).insert("persisted")

    reopened = TaskStore(db)
    assert [t.description for t in reopened.query_all()] == ["persisted"]


def test_old_schema_gets_missing_columns(tmp_path: Path) -> None:
    db = tmp_path / "legacy.sqlite3"
    conn = sqlite3.connect(db)
    conn.execute("CREATE TABLE tasks (id INTEGER PRIMARY KEY AUTOINCREMENT, description TEXT NOT NULL)")
    conn.execute("INSERT INTO tasks(description) VALUES ('legacy row')")
    conn.commit()
    conn.close()

    store = TaskStore(db)

    (task,) = store.query_all()
    assert task.description == "legacy row"
    assert task.is_completed is False
    store.update(task.toggled())
    assert store.query_by_status(True)[0].id == task.id


def test_sqlite_errors_become_storage_failure(store: TaskStore) -> None:
    conn = sqlite3.connect(store.db_path)
    conn.execute("DROP TABLE tasks")
    conn.commit()
    conn.close()

    with pytest.raises(StorageFailure) as exc_info:
        store.query_all()
    assert isinstance(exc_info.value.__cause__, sqlite3.Error)

    with pytest.raises(StorageFailure):
        store.insert("nowhere to go")
