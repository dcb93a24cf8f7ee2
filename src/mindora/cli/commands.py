# src/mindora/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks.task_api import (
    TaskAction,
    apply_action,
    available_actions,
    begin_edit,
    cancel_edit,
    set_filter,
    submit_task_form,
    visible_tasks,
)
from ..tasks.task_models import InvalidStatusError, StatusTransitionError, Task, status_label

ConfirmFn = Callable[[str], bool]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], ConfirmFn | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

DELETE_PROMPT = "Yakin ingin menghapus task ini?"
EMPTY_STATE = "Belum ada task skincare\nTambahkan task untuk memulai rutinitas skincare Anda!"
NO_DESCRIPTION = "Tidak ada deskripsi"

_ACTION_HINTS = {
    TaskAction.COMPLETE: "/done",
    TaskAction.ARCHIVE: "/archive",
    TaskAction.ACTIVATE: "/activate",
    TaskAction.EDIT: "/edit",
    TaskAction.DELETE: "/rm",
}


class CommandRegistry:
    """Slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        # Handlers that get the untouched remainder of the line as args[0].
        self._raw_args: set[str] = set()

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        raw_args: bool = False,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        if raw_args:
            self._raw_args.add(key)
            self._raw_args.update(a.lower() for a in aliases)
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        confirm: ConfirmFn | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split(None, 1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        rest = parts[1].strip() if len(parts) > 1 else ""
        if name in self._raw_args:
            args = [rest] if rest else []
        else:
            args = rest.split()

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, confirm)
            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except (InvalidStatusError, StatusTransitionError) as e:
            logger.info("Command /%s rejected: %s", name, e)
            return f"Error: {e}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering ----


def render_task(task: Task) -> str:
    hints = " ".join(f"{_ACTION_HINTS[a]} {task.id}" for a in available_actions(task))
    return (
        f"#{task.id} [{status_label(task.status)}] {task.title}\n"
        f"    {task.description or NO_DESCRIPTION}\n"
        f"    {hints}"
    )


def render_tasks(state: AppState) -> str:
    tasks = visible_tasks(state)
    header = f"Filter: {state.current_filter} ({len(tasks)})"
    if state.editing_id is not None:
        header += f" | editing #{state.editing_id} (/save or /cancel)"
    if not getattr(state.task_store, "persist_ok", True):
        header += " | WARNING: changes are not being saved"
    if not tasks:
        return f"{header}\n{EMPTY_STATE}"
    return header + "\n" + "\n".join(render_task(t) for t in tasks)


# ---- argument helpers ----


def _split_form(args: list[str]) -> tuple[str, str]:
    """'/add Title words | description words' -> (title, description), spacing kept."""
    text = args[0] if len(args) == 1 else " ".join(args)
    title, _, description = text.partition("|")
    return title.strip(), description.strip()


def _parse_id(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0].lstrip("#"))
    except ValueError:
        return None


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_tasks(state)


def cmd_filter(state: AppState, args: list[str]) -> str:
    """
    /filter                 -> show current filter
    /filter all|active|completed|archived
    """
    if not args:
        return f"Current filter: {state.current_filter}. Use /filter all|active|completed|archived."
    set_filter(state, args[0].lower())
    return render_tasks(state)


def cmd_add(state: AppState, args: list[str]) -> str:
    if state.editing_id is not None:
        return f"Editing #{state.editing_id}. Use /save to update it or /cancel first."
    title, description = _split_form(args)
    result = submit_task_form(state, title, description)
    if not result.ok:
        return "Title is required. Usage: /add <title> [| description]"
    return f"Task #{result.task_id} added.\n" + render_tasks(state)


def cmd_edit(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /edit <id>"
    task = begin_edit(state, task_id)
    if task is None:
        return f"Task #{task_id} not found."
    return (
        f"Editing #{task.id}: {task.title} | {task.description}\n"
        "Use /save <title> [| description] to update, /cancel to stop."
    )


def cmd_save(state: AppState, args: list[str]) -> str:
    if state.editing_id is None:
        return "Nothing to save. Use /edit <id> first."
    task_id = state.editing_id
    title, description = _split_form(args)
    result = submit_task_form(state, title, description)
    if result.ok:
        return f"Task #{task_id} updated.\n" + render_tasks(state)
    if state.editing_id is None:
        return f"Task #{task_id} no longer exists."
    return "Title is required. Usage: /save <title> [| description]"


def cmd_cancel(state: AppState, args: list[str]) -> str:
    if state.editing_id is None:
        return "Not editing."
    cancel_edit(state)
    return "Edit cancelled."


def _status_command(action: TaskAction) -> CommandHandler2:
    def handler(state: AppState, args: list[str]) -> str:
        task_id = _parse_id(args)
        if task_id is None:
            return f"Usage: {_ACTION_HINTS[action]} <id>"
        if not apply_action(state, task_id, action):
            return f"Task #{task_id} not found."
        return render_tasks(state)

    return handler


def cmd_rm(state: AppState, args: list[str], confirm: ConfirmFn | None = None) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /rm <id>"
    if state.task_store.get(task_id) is None:
        return f"Task #{task_id} not found."
    if state.confirm_delete and confirm is not None and not confirm(DELETE_PROMPT):
        return "Delete cancelled."
    apply_action(state, task_id, TaskAction.DELETE)
    return f"Task #{task_id} deleted.\n" + render_tasks(state)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show tasks in the current filter.", aliases=["ls"])
registry.register("filter", cmd_filter, help_text="Change view: /filter all|active|completed|archived.")
registry.register("add", cmd_add, help_text="Add a task: /add <title> [| description].", raw_args=True)
registry.register("edit", cmd_edit, help_text="Start editing a task: /edit <id>.")
registry.register(
    "save", cmd_save, help_text="Save the task being edited: /save <title> [| description].", raw_args=True
)
registry.register("cancel", cmd_cancel, help_text="Stop editing.")
registry.register("done", _status_command(TaskAction.COMPLETE), help_text="Mark an active task completed.")
registry.register("archive", _status_command(TaskAction.ARCHIVE), help_text="Archive a completed task.")
registry.register("activate", _status_command(TaskAction.ACTIVATE), help_text="Reactivate a task.")
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <id>.", aliases=["delete"])
