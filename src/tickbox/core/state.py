# src/tickbox/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_models import (
    DEFAULT_ACCENT_COLOR,
    DEFAULT_LIST,
    DEFAULT_LISTS,
    Task,
    TaskFilter,
)


@dataclass(slots=True, frozen=True)
class AppState:
    """
    Everything the presentation layer renders from.

    Immutable: commands produce a new AppState instead of mutating this one.
    `editing` is the id of the task currently open in the compose dialog.
    """

    tasks: tuple[Task, ...] = ()
    lists: tuple[str, ...] = DEFAULT_LISTS
    current_list: str = DEFAULT_LIST
    filter: TaskFilter = TaskFilter.ALL
    search: str = ""
    accent_color: str = DEFAULT_ACCENT_COLOR
    dark_mode: bool = False
    editing: str | None = None

    def find_task(self, task_id: str) -> Task | None:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None
