# src/mindora/tasks/task_store.py

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable, Iterable, Iterator
from dataclasses import replace
from typing import Any

from ..core.ports import KeyValueStorage
from ..storage.kv_store import StorageError
from .task_models import (
    FILTER_ALL,
    StatusTransitionError,
    Task,
    TaskStatus,
    can_transition,
    format_timestamp,
    parse_filter,
)

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "mindoraTasks"


def serialize_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps([t.to_record() for t in tasks], ensure_ascii=False)


def deserialize_tasks(raw: str) -> list[Task]:
    """Strict inverse of serialize_tasks(); raises ValueError on bad input."""
    try:
        data = json.loads(raw)
    except RecursionError:
        raise ValueError("Stored task list is nested too deeply") from None
    if not isinstance(data, list):
        raise ValueError("Stored task list must be a JSON array")
    out: list[Task] = []
    seen: set[int] = set()
    for item in data:
        task = Task.from_record(item)
        if task.id in seen:
            raise ValueError(f"Duplicate task id: {task.id}")
        seen.add(task.id)
        out.append(task)
    return out


def _decode_lenient(data: Any) -> list[Task]:
    """
    Best-effort decoding of whatever is in storage.

    Skips broken records and duplicate ids, coerces unknown statuses.
    """
    if not isinstance(data, list):
        logger.warning("Stored tasks are not a list (%s); ignoring.", type(data).__name__)
        return []

    out: list[Task] = []
    seen: set[int] = set()
    for item in data:
        if isinstance(item, dict):
            item = {**item, "status": TaskStatus.from_db(item.get("status")).value}
        try:
            task = Task.from_record(item)
        except ValueError as e:
            logger.warning("Skipping stored task: %s", e)
            continue
        if task.id in seen:
            logger.warning("Skipping stored task with duplicate id=%s", task.id)
            continue
        seen.add(task.id)
        out.append(task)
    return out


class TaskStore:
    """
    Ordered task collection (newest first) synchronized with key-value storage.

    The in-memory list is the source of truth. Every mutation rewrites the whole
    serialized list under a single key; a failed write is logged and recorded in
    `persist_ok`, never raised.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = DEFAULT_STORAGE_KEY,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._storage = storage
        self._key = key
        self._clock = clock
        self.persist_ok = True
        self._tasks: list[Task] = self.load()
        self._last_id = max((t.id for t in self._tasks), default=0)
        logger.info("TaskStore ready key=%s total=%s", self._key, len(self._tasks))

    # ---- persistence ----

    def load(self) -> list[Task]:
        try:
            raw = self._storage.get_item(self._key)
        except StorageError:
            logger.exception("Failed to read tasks from storage key=%s", self._key)
            return []
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except (ValueError, RecursionError):
            logger.warning("Stored tasks under key=%s are not valid JSON; starting empty.", self._key)
            return []
        return _decode_lenient(data)

    def _save(self) -> None:
        try:
            self._storage.set_item(self._key, serialize_tasks(self._tasks))
        except StorageError:
            self.persist_ok = False
            logger.exception("Failed to persist %d tasks; keeping in-memory state.", len(self._tasks))
            return
        self.persist_ok = True

    # ---- helpers ----

    def _next_id(self, now: float) -> int:
        # Millisecond timestamp, bumped so ids stay strictly increasing.
        task_id = max(int(now * 1000), self._last_id + 1)
        self._last_id = task_id
        return task_id

    def _index_of(self, task_id: int) -> int | None:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None

    # ---- mutations ----

    def add(self, title: str, description: str = "") -> Task | None:
        title = (title or "").strip()
        if not title:
            logger.debug("Ignoring add with empty title.")
            return None

        now = self._clock()
        task = Task(
            id=self._next_id(now),
            title=title,
            description=(description or "").strip(),
            status=TaskStatus.ACTIVE,
            created_at=format_timestamp(now),
        )
        self._tasks.insert(0, task)
        self._save()
        logger.debug("Task added id=%s title=%r", task.id, task.title)
        return task

    def update(self, task_id: int, title: str, description: str) -> bool:
        idx = self._index_of(task_id)
        if idx is None:
            return False

        title = (title or "").strip()
        if not title:
            logger.debug("Ignoring update of id=%s with empty title.", task_id)
            return False

        self._tasks[idx] = replace(
            self._tasks[idx], title=title, description=(description or "").strip()
        )
        self._save()
        logger.debug("Task updated id=%s", task_id)
        return True

    def set_status(self, task_id: int, status: TaskStatus | str) -> bool:
        idx = self._index_of(task_id)
        if idx is None:
            return False

        new_status = TaskStatus.parse(status)

        task = self._tasks[idx]
        if task.status == new_status:
            return True
        if not can_transition(task.status, new_status):
            raise StatusTransitionError(
                f"Task {task_id}: cannot move from {task.status.value} to {new_status.value}"
            )

        self._tasks[idx] = replace(task, status=new_status)
        self._save()
        logger.debug("Task id=%s status %s -> %s", task_id, task.status.value, new_status.value)
        return True

    def remove(self, task_id: int) -> bool:
        idx = self._index_of(task_id)
        if idx is None:
            return False
        del self._tasks[idx]
        self._save()
        logger.debug("Task removed id=%s", task_id)
        return True

    # ---- queries ----

    def filter(self, status: TaskStatus | str = FILTER_ALL) -> tuple[Task, ...]:
        wanted = parse_filter(status)
        if wanted is None:
            return tuple(self._tasks)
        return tuple(t for t in self._tasks if t.status == wanted)

    def get(self, task_id: int) -> Task | None:
        idx = self._index_of(task_id)
        return None if idx is None else self._tasks[idx]

    def count(self, status: TaskStatus | str = FILTER_ALL) -> int:
        return len(self.filter(status))

    def __iter__(self) -> Iterator[Task]:
        return iter(tuple(self._tasks))

    def __len__(self) -> int:
        return len(self._tasks)
