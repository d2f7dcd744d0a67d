# src/tasklist/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
import sys
import threading
from collections.abc import Sequence

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.task_models import Task, TaskFilter
from ..tasks.task_store import StorageFailure

logger = logging.getLogger(__name__)

FILTER_TITLES = {
    TaskFilter.ALL: "All",
    TaskFilter.COMPLETED: "Completed",
    TaskFilter.PENDING: "Pending",
}

EXIT_WORDS = ("/exit", "/quit")


def friendly_storage_error_message(err: BaseException) -> str:
    if isinstance(err, StorageFailure):
        return "Could not reach the task database. The list shows the last loaded state."
    return "Internal error while handling the command."


def render_screen(app_name: str, tasks: Sequence[Task], active_filter: TaskFilter) -> str:
    """Render the task list as plain text (no ANSI codes)."""
    tabs = "  ".join(
        f"[{title}]" if f is active_filter else f" {title} " for f, title in FILTER_TITLES.items()
    )
    lines = [app_name, tabs, "-" * max(len(tabs), 24)]
    if not tasks:
        lines.append("  (no tasks)")
    for i, task in enumerate(tasks, start=1):
        mark = "x" if task.is_completed else " "
        lines.append(f"{i:>3}. [{mark}] {task.description}")
    return "\n".join(lines)


def _clear_screen() -> None:
    if sys.stdout.isatty():
        print("\033[H\033[2J", end="", flush=True)


async def handle_line(state: AppState, line: str) -> str | None:
    """
    Run one line of user input against the controller.

    Errors are logged and turned into a short message; the loop keeps going.
    """
    try:
        if command_registry.is_command(line):
            return await command_registry.handle(state, line)
        await state.controller.add_task(line)
        return None
    except StorageFailure as e:
        logger.exception("Storage failure while handling %r", line)
        return friendly_storage_error_message(e)
    except Exception as e:
        logger.exception("Command handler crashed.")
        return friendly_storage_error_message(e)


def run_console_loop(state: AppState) -> None:
    """
    Blocking REPL on the main thread.

    input() stays on the main thread so Ctrl-C raises KeyboardInterrupt right at
    the prompt; controller coroutines run on one event loop kept for the whole session.
    """
    settings = state.settings
    app_name = str(getattr(settings, "app_name", "tasklist"))
    clear = bool(getattr(settings, "clear_screen", True))
    controller = state.controller

    logger.info("Console connector started.")

    dirty = threading.Event()
    unsubscribe_tasks = controller.visible_tasks.subscribe(lambda _tasks: dirty.set())
    unsubscribe_filter = controller.active_filter.subscribe(lambda _f: dirty.set())

    reply: str | None = "Type a task to add it. Use /help for commands, /exit to quit."

    try:
        with asyncio.Runner() as runner:
            try:
                runner.run(controller.refresh())
            except StorageFailure as e:
                logger.exception("Initial load failed.")
                reply = friendly_storage_error_message(e)

            while True:
                if dirty.is_set() or reply:
                    dirty.clear()
                    if clear:
                        _clear_screen()
                    print(render_screen(app_name, controller.visible_tasks.value, controller.active_filter.value))
                    if reply:
                        print(f"\n{reply}")
                    reply = None

                try:
                    user_input = input("\n> ").strip()
                except EOFError:
                    logger.info("Console EOF received, exiting.")
                    break
                except KeyboardInterrupt:
                    logger.info("Console KeyboardInterrupt, exiting.")
                    print()
                    break

                if not user_input:
                    continue

                if user_input.lower() in EXIT_WORDS:
                    logger.info("Console exit command received.")
                    break

                try:
                    reply = runner.run(handle_line(state, user_input))
                except KeyboardInterrupt:
                    logger.info("Console KeyboardInterrupt during a command, exiting.")
                    print()
                    break
    finally:
        unsubscribe_tasks()
        unsubscribe_filter()

    logger.info("Console connector finished.")
