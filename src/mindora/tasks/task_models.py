# src/mindora/tasks/task_models.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any, Final

logger = logging.getLogger(__name__)

FILTER_ALL: Final = "all"


class InvalidStatusError(ValueError):
    """Status (or filter) value outside the known set."""


class StatusTransitionError(ValueError):
    """Status change not allowed by the task lifecycle."""


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Allowed moves:
      active    -> completed
      completed -> archived | active
      archived  -> active
    """

    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"

    @classmethod
    def parse(cls, raw: Any) -> TaskStatus:
        """Strict conversion; raises InvalidStatusError."""
        if isinstance(raw, cls):
            return raw
        try:
            return cls(raw)
        except ValueError:
            raise InvalidStatusError(f"Unknown task status: {raw!r}") from None

    @classmethod
    def from_db(cls, raw: Any) -> TaskStatus:
        """Lenient conversion for stored data: anything unknown becomes ACTIVE."""
        if not raw:
            return cls.ACTIVE
        try:
            return cls(raw)
        except ValueError:
            logger.warning("Unknown stored status %r, using %s", raw, cls.ACTIVE.value)
            return cls.ACTIVE


TRANSITIONS: Final[dict[TaskStatus, frozenset[TaskStatus]]] = {
    TaskStatus.ACTIVE: frozenset({TaskStatus.COMPLETED}),
    TaskStatus.COMPLETED: frozenset({TaskStatus.ARCHIVED, TaskStatus.ACTIVE}),
    TaskStatus.ARCHIVED: frozenset({TaskStatus.ACTIVE}),
}

STATUS_LABELS: Final[dict[TaskStatus, str]] = {
    TaskStatus.ACTIVE: "Aktif",
    TaskStatus.COMPLETED: "Selesai",
    TaskStatus.ARCHIVED: "Arsip",
}


def can_transition(current: TaskStatus, new: TaskStatus) -> bool:
    return new == current or new in TRANSITIONS[current]


def status_label(status: Any) -> str:
    try:
        return STATUS_LABELS[TaskStatus(status)]
    except ValueError:
        return str(status)


def parse_filter(raw: Any) -> TaskStatus | None:
    """Return None for "all", otherwise the status to filter by."""
    if raw is None or raw == FILTER_ALL:
        return None
    return TaskStatus.parse(raw)


def format_timestamp(ts: float) -> str:
    """ISO-8601 UTC with millisecond precision and a trailing Z."""
    dt = datetime.fromtimestamp(ts, tz=timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    title: str
    description: str
    status: TaskStatus
    created_at: str

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_record(cls, raw: Any) -> Task:
        """
        Strict decoding of one stored record.

        Raises ValueError for anything that would break the collection
        invariants (missing id, blank title, unknown status).
        """
        if not isinstance(raw, dict):
            raise ValueError(f"Task record must be an object, got {type(raw).__name__}")

        task_id = raw.get("id")
        # bool is an int subclass; never a valid id
        if not isinstance(task_id, int) or isinstance(task_id, bool):
            raise ValueError(f"Task record has invalid id: {task_id!r}")

        title = raw.get("title")
        if not isinstance(title, str) or not title.strip():
            raise ValueError(f"Task {task_id} has an empty title")

        description = raw.get("description") or ""
        if not isinstance(description, str):
            raise ValueError(f"Task {task_id} has a non-string description")

        created_at = raw.get("createdAt")
        if not isinstance(created_at, str):
            raise ValueError(f"Task {task_id} has invalid createdAt: {created_at!r}")

        return cls(
            id=task_id,
            title=title,
            description=description,
            status=TaskStatus.parse(raw.get("status")),
            created_at=created_at,
        )
