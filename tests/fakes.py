# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field

from mindora.storage.kv_store import StorageError


@dataclass(slots=True)
class FakeClock:
    """
    Deterministic clock for TaskStore.

    Each call returns the current value, then advances by `step` seconds.
    """

    now: float = 1_700_000_000.0
    step: float = 1.0

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        return value


@dataclass(slots=True)
class FailingStorage:
    """
    KeyValueStorage that can be switched into failure mode.

    Captures writes for assertions.
    """

    data: dict[str, str] = field(default_factory=dict)
    fail_reads: bool = False
    fail_writes: bool = False
    writes: int = 0

    def get_item(self, key: str) -> str | None:
        if self.fail_reads:
            raise StorageError("storage disabled")
        return self.data.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageError("quota exceeded")
        self.writes += 1
        self.data[key] = value

    def remove_item(self, key: str) -> None:
        self.data.pop(key, None)
