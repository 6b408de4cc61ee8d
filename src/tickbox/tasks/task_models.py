# src/tickbox/tasks/task_models.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

DEFAULT_LISTS: tuple[str, ...] = ("Default", "Work", "Personal")
DEFAULT_LIST = "Default"

ACCENT_COLORS: tuple[str, ...] = (
    "#4f8cff",
    "#ef476f",
    "#ffb200",
    "#00bfae",
    "#8c54ff",
    "#22223b",
    "#607d8b",
    "#23c8b6",
    "#ff607f",
)
DEFAULT_ACCENT_COLOR = ACCENT_COLORS[0]

REMINDER_TITLE = "Task Reminder"


class TaskFilter(StrEnum):
    """Completion filter applied to the current list."""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, raw: str | None) -> TaskFilter | None:
        if not raw:
            return None
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None


@dataclass(slots=True, frozen=True)
class Task:
    id: str
    text: str
    list: str
    completed: bool = False
    due_date: datetime | None = None


def make_task_id(now_ts: float, taken: Iterable[str] = ()) -> str:
    """
    Creation-time-derived id: epoch milliseconds as a decimal string.

    Two tasks created within the same millisecond get consecutive values.
    """
    used = set(taken)
    candidate = int(now_ts * 1000)
    while str(candidate) in used:
        candidate += 1
    return str(candidate)
