# src/tickbox/core/commands.py

from __future__ import annotations

"""
Commands and pure state transitions.

apply(state, command) never touches storage or the reminder scheduler. It returns
the next AppState plus the effects an outer driver has to run:
- PersistKey        -> write one whole collection under its fixed key
- ScheduleReminder  -> hand a due date to the notification scheduler

Commands that fail validation (empty text, unknown id, duplicate list, ...)
return the state unchanged and no effects.
"""

import time
from dataclasses import dataclass, field, replace
from datetime import datetime

from ..tasks.task_codec import (
    ACCENT_COLOR_KEY,
    CURRENT_LIST_KEY,
    DARK_MODE_KEY,
    LISTS_KEY,
    TODOS_KEY,
    encode_bool,
    encode_lists,
    encode_tasks,
)
from ..tasks.task_models import ACCENT_COLORS, Task, TaskFilter, make_task_id
from .state import AppState


# ---- effects ----


@dataclass(slots=True, frozen=True)
class PersistKey:
    key: str
    value: str


@dataclass(slots=True, frozen=True)
class ScheduleReminder:
    text: str
    due_at: datetime


Effect = PersistKey | ScheduleReminder


@dataclass(slots=True, frozen=True)
class Transition:
    state: AppState
    effects: tuple[Effect, ...] = ()


# ---- commands ----


@dataclass(slots=True, frozen=True)
class SubmitTask:
    """Add a task, or save the one being edited when AppState.editing is set."""

    text: str
    due_date: datetime | None = None
    list_name: str | None = None
    # Clock used to mint the id of a new task; defaults to time.time().
    now_ts: float | None = field(default=None, compare=False)


@dataclass(slots=True, frozen=True)
class StartEdit:
    task_id: str


@dataclass(slots=True, frozen=True)
class CancelEdit:
    pass


@dataclass(slots=True, frozen=True)
class ToggleTask:
    task_id: str


@dataclass(slots=True, frozen=True)
class DeleteTask:
    task_id: str


@dataclass(slots=True, frozen=True)
class AddList:
    name: str


@dataclass(slots=True, frozen=True)
class SelectList:
    name: str


@dataclass(slots=True, frozen=True)
class SetFilter:
    filter: TaskFilter


@dataclass(slots=True, frozen=True)
class SetSearch:
    text: str


@dataclass(slots=True, frozen=True)
class SetAccentColor:
    color: str


@dataclass(slots=True, frozen=True)
class SetDarkMode:
    enabled: bool


Command = (
    SubmitTask
    | StartEdit
    | CancelEdit
    | ToggleTask
    | DeleteTask
    | AddList
    | SelectList
    | SetFilter
    | SetSearch
    | SetAccentColor
    | SetDarkMode
)


# ---- transitions ----


def persist_effects(old: AppState, new: AppState) -> list[Effect]:
    """One write per persisted field that differs between old and new."""
    effects: list[Effect] = []
    if new.tasks != old.tasks:
        effects.append(PersistKey(TODOS_KEY, encode_tasks(new.tasks)))
    if new.lists != old.lists:
        effects.append(PersistKey(LISTS_KEY, encode_lists(new.lists)))
    if new.current_list != old.current_list:
        effects.append(PersistKey(CURRENT_LIST_KEY, new.current_list))
    if new.accent_color != old.accent_color:
        effects.append(PersistKey(ACCENT_COLOR_KEY, new.accent_color))
    if new.dark_mode != old.dark_mode:
        effects.append(PersistKey(DARK_MODE_KEY, encode_bool(new.dark_mode)))
    return effects


def _submit_task(state: AppState, cmd: SubmitTask) -> Transition:
    text = (cmd.text or "").strip()
    if not text:
        return Transition(state)

    target = cmd.list_name if cmd.list_name is not None else state.current_list
    if target not in state.lists:
        return Transition(state)

    if state.editing is not None:
        # Editing never schedules, cancels or moves a reminder.
        tasks = tuple(
            replace(t, text=text, due_date=cmd.due_date, list=target) if t.id == state.editing else t
            for t in state.tasks
        )
        new_state = replace(state, tasks=tasks, editing=None)
        return Transition(new_state, tuple(persist_effects(state, new_state)))

    now_ts = time.time() if cmd.now_ts is None else cmd.now_ts
    task = Task(
        id=make_task_id(now_ts, (t.id for t in state.tasks)),
        text=text,
        list=target,
        completed=False,
        due_date=cmd.due_date,
    )
    new_state = replace(state, tasks=(*state.tasks, task), editing=None)

    effects = persist_effects(state, new_state)
    if task.due_date is not None:
        effects.append(ScheduleReminder(text=task.text, due_at=task.due_date))
    return Transition(new_state, tuple(effects))


def _next_state(state: AppState, cmd: Command) -> AppState:
    if isinstance(cmd, StartEdit):
        if state.find_task(cmd.task_id) is None:
            return state
        return replace(state, editing=cmd.task_id)

    if isinstance(cmd, CancelEdit):
        return replace(state, editing=None)

    if isinstance(cmd, ToggleTask):
        if state.find_task(cmd.task_id) is None:
            return state
        tasks = tuple(
            replace(t, completed=not t.completed) if t.id == cmd.task_id else t for t in state.tasks
        )
        return replace(state, tasks=tasks)

    if isinstance(cmd, DeleteTask):
        if state.find_task(cmd.task_id) is None:
            return state
        tasks = tuple(t for t in state.tasks if t.id != cmd.task_id)
        editing = None if state.editing == cmd.task_id else state.editing
        return replace(state, tasks=tasks, editing=editing)

    if isinstance(cmd, AddList):
        name = (cmd.name or "").strip()
        if not name or name in state.lists:
            return state
        return replace(state, lists=(*state.lists, name), current_list=name)

    if isinstance(cmd, SelectList):
        if cmd.name not in state.lists:
            return state
        return replace(state, current_list=cmd.name)

    if isinstance(cmd, SetFilter):
        return replace(state, filter=TaskFilter(cmd.filter))

    if isinstance(cmd, SetSearch):
        return replace(state, search=cmd.text or "")

    if isinstance(cmd, SetAccentColor):
        color = (cmd.color or "").strip().lower()
        if color not in ACCENT_COLORS:
            return state
        return replace(state, accent_color=color)

    if isinstance(cmd, SetDarkMode):
        return replace(state, dark_mode=bool(cmd.enabled))

    raise TypeError(f"Unsupported command: {type(cmd).__name__}")


def apply(state: AppState, cmd: Command) -> Transition:
    """Pure transition: (state, command) -> (state', effects)."""
    if isinstance(cmd, SubmitTask):
        return _submit_task(state, cmd)

    new_state = _next_state(state, cmd)
    return Transition(new_state, tuple(persist_effects(state, new_state)))
