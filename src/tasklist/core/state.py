# src/tasklist/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_controller import TaskListController
from .ports import TaskRepo


@dataclass
class AppState:
    # Settings object (config.Settings or a test SimpleNamespace).
    settings: object

    task_store: TaskRepo
    controller: TaskListController
