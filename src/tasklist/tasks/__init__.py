"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskFilter)
- task_store.py: SQLite-backed storage (the only place that runs SQL)
- task_controller.py: view-model that owns the visible list + active filter
"""
