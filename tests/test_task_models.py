# tests/test_task_models.py

from __future__ import annotations

import pytest

from mindora.tasks.task_models import (
    InvalidStatusError,
    Task,
    TaskStatus,
    can_transition,
    format_timestamp,
    parse_filter,
    status_label,
)


def test_status_parse_strict_and_lenient() -> None:
    assert TaskStatus.parse("archived") is TaskStatus.ARCHIVED
    assert TaskStatus.parse(TaskStatus.ACTIVE) is TaskStatus.ACTIVE
    with pytest.raises(InvalidStatusError):
        TaskStatus.parse("done")

    assert TaskStatus.from_db("completed") is TaskStatus.COMPLETED
    assert TaskStatus.from_db("done") is TaskStatus.ACTIVE
    assert TaskStatus.from_db(None) is TaskStatus.ACTIVE


def test_lifecycle_transitions() -> None:
    a, c, r = TaskStatus.ACTIVE, TaskStatus.COMPLETED, TaskStatus.ARCHIVED
    assert can_transition(a, c)
    assert can_transition(c, r) and can_transition(c, a)
    assert can_transition(r, a)
    assert can_transition(c, c)
    assert not can_transition(a, r)
    assert not can_transition(r, c)


def test_status_labels() -> None:
    assert status_label(TaskStatus.ACTIVE) == "Aktif"
    assert status_label("completed") == "Selesai"
    assert status_label("archived") == "Arsip"
    assert status_label("weird") == "weird"


def test_parse_filter() -> None:
    assert parse_filter("all") is None
    assert parse_filter("active") is TaskStatus.ACTIVE
    with pytest.raises(InvalidStatusError):
        parse_filter("everything")


def test_format_timestamp_matches_iso_with_millis() -> None:
    assert format_timestamp(0) == "1970-01-01T00:00:00.000Z"
    assert format_timestamp(1_717_000_000.456) == "2024-05-29T16:26:40.456Z"


def test_record_round_trip_and_validation() -> None:
    task = Task(7, "Toner", "", TaskStatus.COMPLETED, "2024-01-01T00:00:00.000Z")
    assert Task.from_record(task.to_record()) == task

    with pytest.raises(ValueError):
        Task.from_record({"id": True, "title": "x", "status": "active", "createdAt": "t"})
    with pytest.raises(ValueError):
        Task.from_record({"id": 1, "title": "x", "status": "active"})
    # Missing description decodes as empty.
    assert Task.from_record({"id": 1, "title": "x", "status": "active", "createdAt": "t"}).description == ""
