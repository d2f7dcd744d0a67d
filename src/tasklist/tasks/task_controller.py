# src/tasklist/tasks/task_controller.py

from __future__ import annotations

"""
Task list controller (view-model).

Owns two pieces of observable state:
- visible_tasks: the latest list queried from the store under the active filter
- active_filter: ALL / COMPLETED / PENDING

Every mutation goes through the store and is followed by a full reload, so
observers never see a list that was patched in memory.
"""

import asyncio
import logging

from ..core.observable import StateFlow
from ..core.ports import TaskRepo
from .task_models import Task, TaskFilter

logger = logging.getLogger(__name__)


class ControllerClosed(RuntimeError):
    """An operation was started on a controller after close()."""


class TaskListController:
    """
    Mediates UI actions and the TaskRepo.

    Store calls run in a worker thread (asyncio.to_thread) so the event loop
    is never blocked. Operations on one instance are serialized by a lock:
    mutate + reload of one call never interleaves with another call.

    A StorageFailure raised by the store propagates to the caller and the
    last published snapshot stays in place.
    """

    def __init__(self, store: TaskRepo, *, initial_filter: TaskFilter = TaskFilter.ALL) -> None:
        self._store = store
        self._lock = asyncio.Lock()
        self._closed = False

        self.visible_tasks: StateFlow[tuple[Task, ...]] = StateFlow(())
        self.active_filter: StateFlow[TaskFilter] = StateFlow(initial_filter, distinct=True)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Stop publishing. In-flight store calls finish but their results are dropped."""
        if not self._closed:
            self._closed = True
            logger.debug("TaskListController closed")

    # ---- internals ----

    def _ensure_open(self) -> None:
        if self._closed:
            raise ControllerClosed("controller is closed")

    async def _query(self, task_filter: TaskFilter) -> tuple[Task, ...]:
        flag = task_filter.completed_flag
        if flag is None:
            tasks = await asyncio.to_thread(self._store.query_all)
        else:
            tasks = await asyncio.to_thread(self._store.query_by_status, flag)
        return tuple(tasks)

    async def _reload(self) -> None:
        tasks = await self._query(self.active_filter.value)

        if self._closed:
            logger.debug("Reload finished after close; snapshot dropped")
            return
        self.visible_tasks.publish(tasks)

    # ---- public API ----

    async def refresh(self) -> None:
        self._ensure_open()
        async with self._lock:
            await self._reload()

    async def add_task(self, description: str) -> None:
        self._ensure_open()
        if not description or not description.strip():
            logger.debug("add_task ignored: empty description")
            return
        async with self._lock:
            task = await asyncio.to_thread(self._store.insert, description)
            logger.info("Task added id=%s", task.id)
            await self._reload()

    async def edit_task(self, task: Task, new_description: str) -> None:
        self._ensure_open()
        async with self._lock:
            changed = await asyncio.to_thread(self._store.update, task.with_description(new_description))
            logger.info("Task edited id=%s rows=%s", task.id, changed)
            await self._reload()

    async def toggle_completion(self, task: Task) -> None:
        self._ensure_open()
        async with self._lock:
            updated = task.toggled()
            changed = await asyncio.to_thread(self._store.update, updated)
            logger.info(
                "Task toggled id=%s completed=%s rows=%s", task.id, updated.is_completed, changed
            )
            await self._reload()

    async def delete_task(self, task: Task) -> None:
        self._ensure_open()
        async with self._lock:
            changed = await asyncio.to_thread(self._store.delete_one, task)
            logger.info("Task deleted id=%s rows=%s", task.id, changed)
            await self._reload()

    async def delete_all_tasks(self) -> None:
        self._ensure_open()
        async with self._lock:
            await asyncio.to_thread(self._store.delete_all)
            await self._reload()

    async def set_filter(self, task_filter: TaskFilter) -> None:
        """
        Switch the filter. The new filter is published together with its list,
        only after the query succeeded; on StorageFailure both stay as they were.
        """
        self._ensure_open()
        async with self._lock:
            tasks = await self._query(task_filter)

            if self._closed:
                logger.debug("Filter change finished after close; dropped")
                return
            if self.active_filter.publish(task_filter):
                logger.info("Filter -> %s", task_filter.value)
            self.visible_tasks.publish(tasks)
