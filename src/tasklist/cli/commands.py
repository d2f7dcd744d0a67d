# src/tasklist/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from ..core.state import AppState
from ..tasks.task_models import Task, TaskFilter

# (state, args, rest) -> optional reply; `rest` is the raw text after the command name.
CommandHandler = Callable[[AppState, list[str], str], Awaitable[str | None]]

logger = logging.getLogger(__name__)


class CommandError(ValueError):
    """Bad user input for a command (shown to the user as-is)."""


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def is_command(self, line: str) -> bool:
        return line.startswith("/")

    async def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string, or None when the command has nothing to say.

        Storage failures are not handled here; they propagate to the caller.
        """
        if not self.is_command(line):
            raise ValueError(f"not a command: {line!r}")

        body = line[1:].strip()
        if not body:
            return "Empty command. Use /help to list available commands."

        name, _, rest = body.partition(" ")
        name = name.lower()
        rest = rest.strip()
        args = rest.split()

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            return await handler(state, args, rest)
        except CommandError as e:
            return str(e)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        lines.append("Text without a leading '/' is added as a new task.")
        return "\n".join(lines)


registry = CommandRegistry()


def _task_at(state: AppState, token: str | None) -> Task:
    """Resolve a 1-based position in the visible list."""
    if not token:
        raise CommandError("Missing task number.")
    try:
        n = int(token)
    except ValueError:
        raise CommandError(f"Not a task number: {token}") from None

    tasks = state.controller.visible_tasks.value
    if n < 1 or n > len(tasks):
        raise CommandError(f"No task #{n} (visible: {len(tasks)}).")
    return tasks[n - 1]


async def cmd_help(state: AppState, args: list[str], rest: str) -> str | None:
    return registry.build_help()


async def cmd_add(state: AppState, args: list[str], rest: str) -> str | None:
    await state.controller.add_task(rest)
    return None


async def cmd_edit(state: AppState, args: list[str], rest: str) -> str | None:
    """
    /edit N new text
    """
    token, _, text = rest.partition(" ")
    task = _task_at(state, token)
    text = text.strip()
    if not text:
        raise CommandError("Usage: /edit N new description")
    await state.controller.edit_task(task, text)
    return None


async def cmd_toggle(state: AppState, args: list[str], rest: str) -> str | None:
    task = _task_at(state, args[0] if args else None)
    await state.controller.toggle_completion(task)
    return None


async def cmd_delete(state: AppState, args: list[str], rest: str) -> str | None:
    task = _task_at(state, args[0] if args else None)
    await state.controller.delete_task(task)
    return f"Deleted: {task.description}"


async def cmd_clear(state: AppState, args: list[str], rest: str) -> str | None:
    await state.controller.delete_all_tasks()
    return "All tasks deleted."


async def cmd_filter(state: AppState, args: list[str], rest: str) -> str | None:
    """
    /filter            -> show the active filter
    /filter all        -> show every task
    /filter completed  -> only completed tasks
    /filter pending    -> only pending tasks
    """
    if not args:
        return f"Filter is {state.controller.active_filter.value.value}. Use /filter all|completed|pending."
    try:
        task_filter = TaskFilter.parse(args[0])
    except ValueError:
        raise CommandError("Usage: /filter all|completed|pending") from None
    await state.controller.set_filter(task_filter)
    return None


async def cmd_list(state: AppState, args: list[str], rest: str) -> str | None:
    await state.controller.refresh()
    return None


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add buy milk.", aliases=["a"])
registry.register("edit", cmd_edit, help_text="Change a description: /edit N new text.", aliases=["e"])
registry.register(
    "toggle", cmd_toggle, help_text="Mark task N completed/pending: /toggle N.", aliases=["t", "x", "done"]
)
registry.register("delete", cmd_delete, help_text="Delete task N: /delete N.", aliases=["d", "del", "rm"])
registry.register("clear", cmd_clear, help_text="Delete all tasks.")
registry.register(
    "filter", cmd_filter, help_text="Filter: /filter all | completed | pending.", aliases=["f"]
)
registry.register("list", cmd_list, help_text="Reload the list from the database.", aliases=["ls"])
