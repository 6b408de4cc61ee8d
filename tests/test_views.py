# tests/test_views.py

from __future__ import annotations

from tickbox.core.state import AppState
from tickbox.core.views import filter_tasks, visible_tasks
from tickbox.tasks.task_models import Task, TaskFilter

TASKS = (
    Task(id="1", text="Buy milk", list="Default"),
    Task(id="2", text="Pay rent", list="Default", completed=True),
    Task(id="3", text="Write report", list="Work"),
    Task(id="4", text="buy MILK again", list="Default"),
    Task(id="5", text="Walk dog", list="Default", completed=True),
)


def test_active_filter_returns_open_tasks_of_list_in_insertion_order() -> None:
    view = filter_tasks(TASKS, current_list="Default", task_filter="active", search="")
    assert [t.id for t in view] == ["1", "4"]
    assert view == [t for t in TASKS if t.list == "Default" and not t.completed]


def test_completed_and_all_filters() -> None:
    done = filter_tasks(TASKS, current_list="Default", task_filter=TaskFilter.COMPLETED)
    every = filter_tasks(TASKS, current_list="Default", task_filter=TaskFilter.ALL)
    assert [t.id for t in done] == ["2", "5"]
    assert [t.id for t in every] == ["1", "2", "4", "5"]


def test_search_is_case_insensitive_substring() -> None:
    view = filter_tasks(TASKS, current_list="Default", search="MiLk")
    assert [t.id for t in view] == ["1", "4"]

    assert filter_tasks(TASKS, current_list="Default", search="xyz") == []


def test_other_lists_never_leak_into_view() -> None:
    view = filter_tasks(TASKS, current_list="Work", search="")
    assert [t.id for t in view] == ["3"]
    assert filter_tasks(TASKS, current_list="Personal") == []


def test_visible_tasks_projects_app_state() -> None:
    state = AppState(tasks=TASKS, filter=TaskFilter.ACTIVE, search="milk")
    assert [t.id for t in visible_tasks(state)] == ["1", "4"]
