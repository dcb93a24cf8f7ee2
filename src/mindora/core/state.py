# src/mindora/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_models import FILTER_ALL
from .ports import TaskRepo


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    task_store: TaskRepo

    # Presentation state: which view is shown and which task is being edited.
    current_filter: str = FILTER_ALL
    editing_id: int | None = None
    confirm_delete: bool = True
