# src/mindora/tasks/task_api.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from ..core.state import AppState
from .task_models import Task, TaskStatus, parse_filter

logger = logging.getLogger(__name__)


class TaskAction(StrEnum):
    COMPLETE = "complete"
    ARCHIVE = "archive"
    ACTIVATE = "activate"
    EDIT = "edit"
    DELETE = "delete"


# Status each status-changing action moves a task into.
ACTION_TARGETS: dict[TaskAction, TaskStatus] = {
    TaskAction.COMPLETE: TaskStatus.COMPLETED,
    TaskAction.ARCHIVE: TaskStatus.ARCHIVED,
    TaskAction.ACTIVATE: TaskStatus.ACTIVE,
}

_STATUS_ACTIONS: dict[TaskStatus, tuple[TaskAction, ...]] = {
    TaskStatus.ACTIVE: (TaskAction.COMPLETE,),
    TaskStatus.COMPLETED: (TaskAction.ARCHIVE, TaskAction.ACTIVATE),
    TaskStatus.ARCHIVED: (TaskAction.ACTIVATE,),
}


@dataclass(frozen=True, slots=True)
class FormResult:
    """Outcome of a task form submission."""

    task_id: int | None
    created: bool
    ok: bool


def available_actions(task: Task) -> tuple[TaskAction, ...]:
    """Actions the UI offers for a task, status moves first."""
    return _STATUS_ACTIONS[task.status] + (TaskAction.EDIT, TaskAction.DELETE)


def set_filter(state: AppState, value: str) -> str:
    """Switch the current view; raises InvalidStatusError for unknown values."""
    wanted = parse_filter(value)
    state.current_filter = "all" if wanted is None else wanted.value
    logger.debug("Filter set to %s", state.current_filter)
    return state.current_filter


def visible_tasks(state: AppState) -> tuple[Task, ...]:
    return state.task_store.filter(state.current_filter)


def begin_edit(state: AppState, task_id: int) -> Task | None:
    task = state.task_store.get(task_id)
    if task is None:
        return None
    state.editing_id = task.id
    return task


def cancel_edit(state: AppState) -> None:
    state.editing_id = None


def submit_task_form(state: AppState, title: str, description: str = "") -> FormResult:
    """
    Handle the add/edit form.

    Updates the task under edit when there is one (and leaves edit mode),
    otherwise adds a new task. Empty titles are rejected by the store.
    """
    title = (title or "").strip()
    description = (description or "").strip()

    if state.editing_id is not None:
        task_id = state.editing_id
        ok = state.task_store.update(task_id, title, description)
        if ok or state.task_store.get(task_id) is None:
            cancel_edit(state)
        return FormResult(task_id=task_id, created=False, ok=ok)

    task = state.task_store.add(title, description)
    if task is None:
        return FormResult(task_id=None, created=True, ok=False)
    return FormResult(task_id=task.id, created=True, ok=True)


def apply_action(state: AppState, task_id: int, action: TaskAction) -> bool:
    """Run a status-changing action or a delete. Returns False for unknown ids."""
    if action is TaskAction.DELETE:
        removed = state.task_store.remove(task_id)
        if not removed:
            logger.info("Delete ignored: task id=%s not found", task_id)
        if removed and state.editing_id == task_id:
            cancel_edit(state)
        return removed

    target = ACTION_TARGETS.get(action)
    if target is None:
        raise ValueError(f"Action {action.value} does not change status")
    changed = state.task_store.set_status(task_id, target)
    if not changed:
        logger.info("Action %s ignored: task id=%s not found", action.value, task_id)
    return changed
