# src/tasklist/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from collections.abc import Iterator
from pathlib import Path

from .task_models import Task

logger = logging.getLogger(__name__)


class StorageFailure(RuntimeError):
    """The store could not complete an insert/update/delete/query."""


class TaskStore:
    """
    SQLite task store.

    The schema is migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Thread-safety:
    - each method opens its own SQLite connection, so calls may run
      from worker threads (the controller uses asyncio.to_thread)

    Updates and deletes that match no row are not errors: they return 0.
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        try:
            total = self.count_tasks()
        except StorageFailure:
            total = -1
        logger.info("TaskStore ready db=%s total=%s", self._db_path, total)

    @property
    def db_path(self) -> Path:
        return self._db_path

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    @contextlib.contextmanager
    def _connection(self, op: str) -> Iterator[sqlite3.Connection]:
        """Open a connection for one statement; map sqlite errors to StorageFailure."""
        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            logger.error("TaskStore %s: cannot open db=%s: %s", op, self._db_path, e)
            raise StorageFailure(f"{op} failed: {e}") from e
        try:
            yield conn
        except sqlite3.Error as e:
            logger.error("TaskStore %s failed: %s", op, e)
            raise StorageFailure(f"{op} failed: {e}") from e
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._connection("ensure_schema") as conn:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    description TEXT NOT NULL,
                    is_completed INTEGER NOT NULL DEFAULT 0,
                    created_at REAL NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )

            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("description", "TEXT NOT NULL DEFAULT ''")
            add_col("is_completed", "INTEGER NOT NULL DEFAULT 0")
            add_col("created_at", "REAL NOT NULL DEFAULT 0")
            add_col("updated_at", "REAL NOT NULL DEFAULT 0")

            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_completed ON tasks(is_completed)")

            conn.commit()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            description=str(row["description"] or ""),
            is_completed=bool(row["is_completed"]),
        )

    # ---- public API ----

    def count_tasks(self) -> int:
        with self._connection("count_tasks") as conn:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            return int(n)

    def insert(self, description: str) -> Task:
        now = time.time()
        with self._connection("insert") as conn:
            cur = conn.execute(
                """
                INSERT INTO tasks(description, is_completed, created_at, updated_at)
                VALUES (?, 0, ?, ?)
                """,
                (description, now, now),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise StorageFailure("SQLite did not return lastrowid for tasks insert")
            task = Task(id=int(rowid), description=description, is_completed=False)
            logger.debug("Task inserted id=%s", task.id)
            return task

    def update(self, task: Task) -> int:
        """Replace the stored fields of `task.id`. Returns affected rows (0 if gone)."""
        with self._connection("update") as conn:
            cur = conn.execute(
                """
                UPDATE tasks
                SET description = ?, is_completed = ?, updated_at = ?
                WHERE id = ?
                """,
                (task.description, int(task.is_completed), time.time(), int(task.id)),
            )
            conn.commit()
            if cur.rowcount == 0:
                logger.debug("Task update id=%s matched no row", task.id)
            return cur.rowcount

    def delete_one(self, task: Task) -> int:
        with self._connection("delete_one") as conn:
            cur = conn.execute("DELETE FROM tasks WHERE id = ?", (int(task.id),))
            conn.commit()
            return cur.rowcount

    def delete_all(self) -> int:
        with self._connection("delete_all") as conn:
            cur = conn.execute("DELETE FROM tasks")
            conn.commit()
            logger.info("Deleted all tasks (%s rows)", cur.rowcount)
            return cur.rowcount

    def query_all(self) -> list[Task]:
        with self._connection("query_all") as conn:
            rows = conn.execute("SELECT * FROM tasks ORDER BY id ASC").fetchall()
            return [self._row_to_task(r) for r in rows]

    def query_by_status(self, completed: bool) -> list[Task]:
        with self._connection("query_by_status") as conn:
            rows = conn.execute(
                "SELECT * FROM tasks WHERE is_completed = ? ORDER BY id ASC",
                (int(bool(completed)),),
            ).fetchall()
            return [self._row_to_task(r) for r in rows]
