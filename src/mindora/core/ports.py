# src/mindora/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on a Protocol instead of a concrete storage backend.
This keeps storage swappable (memory / JSON file / SQLite) and makes testing easier.
"""

from typing import Any, Iterator, Protocol


class KeyValueStorage(Protocol):
    """
    localStorage-style string store.

    Implementations raise mindora.storage.kv_store.StorageError on failure.
    """

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...


class TaskRepo(Protocol):
    """What the presentation layer needs from the task store."""

    persist_ok: bool

    # Mutations
    def add(self, title: str, description: str = "") -> Any | None: ...
    def update(self, task_id: int, title: str, description: str) -> bool: ...
    def set_status(self, task_id: int, status: Any) -> bool: ...
    def remove(self, task_id: int) -> bool: ...

    # Queries
    def filter(self, status: Any = "all") -> tuple[Any, ...]: ...
    def get(self, task_id: int) -> Any | None: ...
    def count(self, status: Any = "all") -> int: ...
    def __iter__(self) -> Iterator[Any]: ...
    def __len__(self) -> int: ...
