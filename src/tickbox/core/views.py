# src/tickbox/core/views.py

from __future__ import annotations

from collections.abc import Iterable

from ..tasks.task_models import Task, TaskFilter
from .state import AppState


def _passes_filter(task: Task, task_filter: TaskFilter) -> bool:
    if task_filter == TaskFilter.ACTIVE:
        return not task.completed
    if task_filter == TaskFilter.COMPLETED:
        return task.completed
    return True


def filter_tasks(
    tasks: Iterable[Task],
    *,
    current_list: str,
    task_filter: TaskFilter | str = TaskFilter.ALL,
    search: str = "",
) -> list[Task]:
    """
    Tasks of `current_list` that pass the completion filter and contain `search`
    (case-insensitive). Keeps the insertion order of `tasks`.
    """
    task_filter = TaskFilter(task_filter)
    needle = (search or "").lower()
    return [
        t
        for t in tasks
        if t.list == current_list and _passes_filter(t, task_filter) and needle in t.text.lower()
    ]


def visible_tasks(state: AppState) -> list[Task]:
    return filter_tasks(
        state.tasks,
        current_list=state.current_list,
        task_filter=state.filter,
        search=state.search,
    )
