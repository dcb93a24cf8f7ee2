# src/mindora/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- picks the storage backend and builds the single TaskStore for the process.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import KeyValueStorage
from ..core.state import AppState
from ..storage.kv_store import JsonFileStorage, MemoryStorage, SQLiteStorage, StorageError
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_path.parent.mkdir(parents=True, exist_ok=True)


def create_storage(settings) -> KeyValueStorage:
    backend = str(getattr(settings, "storage_backend", "json"))
    if backend == "memory":
        return MemoryStorage()
    if backend == "sqlite":
        try:
            return SQLiteStorage(settings.storage_path)
        except StorageError:
            # The session stays usable, it just will not survive a restart.
            logger.exception("SQLite storage unavailable; falling back to memory.")
            return MemoryStorage()
    return JsonFileStorage(settings.storage_path)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if settings.storage_backend != "memory":
        _ensure_local_dirs(settings)

    storage = create_storage(settings)
    store = TaskStore(storage, key=settings.storage_key)

    return AppState(
        settings=settings,
        task_store=store,
        confirm_delete=bool(getattr(settings, "confirm_delete", True)),
    )
