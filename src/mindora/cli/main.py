# src/mindora/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (one TaskStore per process),
then runs the console front-end in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)

    log_dir = getattr(settings, "data_dir", ".local/mindora")
    log_file = setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s (storage=%s, log=%s)...", settings.app_name, settings.storage_backend, log_file)

    state = create_initial_state(settings=settings)

    try:
        run_console_loop(state)
    finally:
        if not state.task_store.persist_ok:
            logger.warning("Last save failed; recent changes may be lost.")
        logger.info("Bye.")


if __name__ == "__main__":
    main()
