# src/mindora/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import registry as command_registry
from ..cli.commands import render_tasks
from ..core.state import AppState

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def _ask_yes_no(read: InputFn, question: str) -> bool:
    try:
        answer = read(f"{question} [y/N] ").strip().lower()
    except (EOFError, KeyboardInterrupt):
        return False
    return answer in ("y", "yes", "ya")


def run_console_loop(
    state: AppState,
    *,
    read: InputFn = input,
    write: OutputFn = print,
) -> None:
    logger.info("Console connector started (filter=%s).", state.current_filter)
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "Mindora"))

    write(f"[{app_name}] Use /help for commands. Use /exit to quit.\n")
    write(render_tasks(state))

    def confirm(question: str) -> bool:
        return _ask_yes_no(read, question)

    while True:
        try:
            user_input = read(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        # Plain text is shorthand for /add (or /save while editing).
        if not user_input.startswith("/"):
            user_input = ("/save " if state.editing_id is not None else "/add ") + user_input

        try:
            response = command_registry.handle(state, user_input, confirm=confirm)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response is not None:
            write(response)

    logger.info("Console connector finished.")
