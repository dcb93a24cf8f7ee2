# tests/test_kv_store.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from mindora.storage.kv_store import JsonFileStorage, MemoryStorage, SQLiteStorage, StorageError
from mindora.tasks.task_store import TaskStore


def test_memory_storage_basic() -> None:
    s = MemoryStorage({"a": "1"})
    assert s.get_item("a") == "1"
    s.set_item("b", "2")
    s.remove_item("a")
    s.remove_item("missing")
    assert s.get_item("a") is None
    assert s.get_item("b") == "2"


def test_json_file_storage_persists_across_instances(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "storage.json"
    JsonFileStorage(path).set_item("mindoraTasks", "[]")
    JsonFileStorage(path).set_item("other", "x")

    s = JsonFileStorage(path)
    assert s.get_item("mindoraTasks") == "[]"
    assert json.loads(path.read_text("utf-8")) == {"mindoraTasks": "[]", "other": "x"}
    assert not path.with_suffix(".tmp").exists()

    s.remove_item("other")
    assert JsonFileStorage(path).get_item("other") is None


def test_json_file_storage_missing_file_is_empty(tmp_path: Path) -> None:
    assert JsonFileStorage(tmp_path / "absent.json").get_item("k") is None


@pytest.mark.parametrize("content", ["{broken", "[1, 2]"])
def test_json_file_storage_bad_content_raises(tmp_path: Path, content: str) -> None:
    path = tmp_path / "storage.json"
    path.write_text(content, "utf-8")

    with pytest.raises(StorageError):
        JsonFileStorage(path).get_item("k")


def test_json_file_storage_write_error_raises(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a directory", "utf-8")

    with pytest.raises(StorageError):
        JsonFileStorage(blocker / "storage.json").set_item("k", "v")


def test_sqlite_storage_upsert_and_delete(tmp_path: Path) -> None:
    db = tmp_path / "storage.sqlite3"
    s = SQLiteStorage(db)
    assert s.get_item("k") is None

    s.set_item("k", "v1")
    s.set_item("k", "v2")
    assert SQLiteStorage(db).get_item("k") == "v2"

    s.remove_item("k")
    assert s.get_item("k") is None


@pytest.mark.parametrize("backend", ["json", "sqlite"])
def test_task_store_round_trip_on_disk(tmp_path: Path, backend: str) -> None:
    def open_storage():
        if backend == "sqlite":
            return SQLiteStorage(tmp_path / "storage.sqlite3")
        return JsonFileStorage(tmp_path / "storage.json")

    store = TaskStore(open_storage())
    t1 = store.add("Cleanser", "Morning wash")
    store.add("Toner")
    assert t1 is not None
    store.set_status(t1.id, "completed")

    assert TaskStore(open_storage()).filter("all") == store.filter("all")


def test_json_file_storage_deeply_nested_raises_storage_error(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    path.write_text("[" * 100_000 + "]" * 100_000, "utf-8")

    with pytest.raises(StorageError):
        JsonFileStorage(path).get_item("k")
    # The task store treats it as unreadable storage and starts empty.
    assert len(TaskStore(JsonFileStorage(path))) == 0


def test_json_file_storage_warns_about_non_string_values(tmp_path: Path, caplog) -> None:
    path = tmp_path / "storage.json"
    path.write_text(json.dumps({"mindoraTasks": "[]", "settings": {"theme": "pink"}}), "utf-8")

    with caplog.at_level("WARNING", logger="mindora.storage.kv_store"):
        assert JsonFileStorage(path).get_item("mindoraTasks") == "[]"

    assert "settings" in caplog.text
