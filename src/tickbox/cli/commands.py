# src/tickbox/cli/commands.py

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from ..core.commands import (
    AddList,
    CancelEdit,
    DeleteTask,
    SelectList,
    SetAccentColor,
    SetDarkMode,
    SetFilter,
    SetSearch,
    StartEdit,
    SubmitTask,
    ToggleTask,
)
from ..core.manager import StateManager
from ..core.state import AppState
from ..core.views import visible_tasks
from ..tasks.due_dates import humanize_due_date
from ..tasks.task_models import ACCENT_COLORS, Task, TaskFilter

CommandHandler = Callable[[StateManager, list[str]], str]

DUE_SEPARATOR = "@"
NO_DUE = "none"
EXIT_COMMANDS = ("/exit", "/quit")
DUE_FORMATS = ("%Y-%m-%d %H:%M", "%Y-%m-%dT%H:%M", "%Y-%m-%d")


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, manager: StateManager, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(manager, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering ----


def render_task(index: int, task: Task, now: datetime | None = None) -> str:
    mark = "x" if task.completed else " "
    line = f"  {index}. [{mark}] {task.text}"
    due = humanize_due_date(task.due_date, now=now)
    if due:
        line += f"  (due {due})"
    return line


def render_view(state: AppState, now: datetime | None = None) -> str:
    theme = "dark" if state.dark_mode else "light"
    header = f"[{state.current_list}] filter={state.filter.value} accent={state.accent_color} theme={theme}"
    if state.search:
        header += f' search="{state.search}"'

    lines = [header]
    tasks = visible_tasks(state)
    if not tasks:
        lines.append("  No tasks yet!")
    for i, task in enumerate(tasks, start=1):
        lines.append(render_task(i, task, now=now))

    chips = " ".join(f"*{name}*" if name == state.current_list else name for name in state.lists)
    lines.append(f"Lists: {chips}")
    if state.editing is not None:
        editing = state.find_task(state.editing)
        if editing is not None:
            lines.append(f'Editing: "{editing.text}" (/save <text> [@ YYYY-MM-DD HH:MM | @ none] or /cancel)')
    return "\n".join(lines)


# ---- argument helpers ----


def parse_due(raw: str) -> datetime:
    raw = raw.strip()
    for fmt in DUE_FORMATS:
        try:
            return datetime.strptime(raw, fmt)
        except ValueError:
            continue
    raise ValueError(f"Unrecognized date {raw!r}; use YYYY-MM-DD HH:MM.")


def split_text_and_due(args: list[str]) -> tuple[str, datetime | None]:
    """'Buy milk @ 2027-03-05 09:00' -> ('Buy milk', datetime(2027, 3, 5, 9, 0))."""
    if DUE_SEPARATOR not in args:
        return " ".join(args), None
    pos = len(args) - 1 - args[::-1].index(DUE_SEPARATOR)
    return " ".join(args[:pos]), parse_due(" ".join(args[pos + 1 :]))


def _task_at(manager: StateManager, args: list[str]) -> Task | None:
    """Task by 1-based position in the currently visible list."""
    if not args:
        return None
    try:
        index = int(args[0])
    except ValueError:
        return None
    tasks = manager.visible_tasks()
    if index < 1 or index > len(tasks):
        return None
    return tasks[index - 1]


# ---- handlers ----


def cmd_help(manager: StateManager, args: list[str]) -> str:
    return registry.build_help()


def cmd_show(manager: StateManager, args: list[str]) -> str:
    return render_view(manager.state)


def cmd_add(manager: StateManager, args: list[str]) -> str:
    try:
        text, due = split_text_and_due(args)
    except ValueError as e:
        return str(e)
    if not text.strip():
        return "Usage: /add <text> [@ YYYY-MM-DD HH:MM]"
    if manager.state.editing is not None:
        manager.dispatch(CancelEdit())
    manager.dispatch(SubmitTask(text=text, due_date=due))
    return render_view(manager.state)


def cmd_edit(manager: StateManager, args: list[str]) -> str:
    task = _task_at(manager, args)
    if task is None:
        return "Usage: /edit <n> (n = task number in the current view)"
    manager.dispatch(StartEdit(task.id))
    return render_view(manager.state)


def cmd_save(manager: StateManager, args: list[str]) -> str:
    if manager.state.editing is None:
        return "Nothing is being edited. Use /edit <n> first."
    clear_due = [a.lower() for a in args[-2:]] == [DUE_SEPARATOR, NO_DUE]
    try:
        text, due = split_text_and_due(args[:-2] if clear_due else args)
    except ValueError as e:
        return str(e)
    if not text.strip():
        return "Usage: /save <text> [@ YYYY-MM-DD HH:MM | @ none]"
    if due is None and not clear_due:
        editing = manager.state.find_task(manager.state.editing)
        due = editing.due_date if editing is not None else None
    manager.dispatch(SubmitTask(text=text, due_date=due))
    return render_view(manager.state)


def cmd_cancel(manager: StateManager, args: list[str]) -> str:
    manager.dispatch(CancelEdit())
    return render_view(manager.state)


def cmd_done(manager: StateManager, args: list[str]) -> str:
    task = _task_at(manager, args)
    if task is None:
        return "Usage: /done <n>"
    manager.dispatch(ToggleTask(task.id))
    return render_view(manager.state)


def cmd_rm(manager: StateManager, args: list[str]) -> str:
    task = _task_at(manager, args)
    if task is None:
        return "Usage: /rm <n>"
    manager.dispatch(DeleteTask(task.id))
    return render_view(manager.state)


def cmd_lists(manager: StateManager, args: list[str]) -> str:
    state = manager.state
    lines = ["Lists:"]
    for name in state.lists:
        count = sum(1 for t in state.tasks if t.list == name and not t.completed)
        marker = "*" if name == state.current_list else " "
        lines.append(f" {marker} {name} ({count} open)")
    return "\n".join(lines)


def cmd_list(manager: StateManager, args: list[str]) -> str:
    name = " ".join(args)
    if name not in manager.state.lists:
        return f"Unknown list: {name!r}. Use /lists or /newlist <name>."
    manager.dispatch(SelectList(name))
    return render_view(manager.state)


def cmd_newlist(manager: StateManager, args: list[str]) -> str:
    name = " ".join(args)
    if not name:
        return "Usage: /newlist <name>"
    manager.dispatch(AddList(name))
    return render_view(manager.state)


def cmd_filter(manager: StateManager, args: list[str]) -> str:
    task_filter = TaskFilter.parse(args[0] if args else None)
    if task_filter is None:
        return "Usage: /filter all | active | completed"
    manager.dispatch(SetFilter(task_filter))
    return render_view(manager.state)


def cmd_search(manager: StateManager, args: list[str]) -> str:
    manager.dispatch(SetSearch(" ".join(args)))
    return render_view(manager.state)


def cmd_accent(manager: StateManager, args: list[str]) -> str:
    if not args:
        palette = " ".join(f"[{c}]" if c == manager.state.accent_color else c for c in ACCENT_COLORS)
        return f"Accent colors: {palette}\nUse /accent <color>."
    color = args[0].lower()
    if color not in ACCENT_COLORS:
        return f"Unknown accent color {args[0]!r}. Use /accent to see the palette."
    manager.dispatch(SetAccentColor(color))
    return f"Accent color set to {manager.state.accent_color}."


def cmd_exit(manager: StateManager, args: list[str]) -> str:
    return "Bye."


def cmd_dark(manager: StateManager, args: list[str]) -> str:
    """
    /dark      -> show status
    /dark on   -> dark theme
    /dark off  -> light theme
    """
    if not args:
        return f"Dark mode is currently {'ON' if manager.state.dark_mode else 'OFF'}. Use /dark on or /dark off."

    arg = args[0].lower()
    if arg in ("on", "1", "true", "yes"):
        manager.dispatch(SetDarkMode(True))
        return "Dark mode ON."
    if arg in ("off", "0", "false", "no"):
        manager.dispatch(SetDarkMode(False))
        return "Dark mode OFF."
    return "Usage: /dark on or /dark off."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("show", cmd_show, help_text="Show the tasks of the current list.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <text> [@ YYYY-MM-DD HH:MM].")
registry.register("edit", cmd_edit, help_text="Start editing task <n>.")
registry.register("save", cmd_save, help_text="Save the edit: /save <text> [@ YYYY-MM-DD HH:MM | @ none].")
registry.register("cancel", cmd_cancel, help_text="Stop editing without saving.")
registry.register("done", cmd_done, help_text="Toggle completion of task <n>.", aliases=["toggle"])
registry.register("rm", cmd_rm, help_text="Delete task <n>.", aliases=["del"])
registry.register("lists", cmd_lists, help_text="Show all lists.")
registry.register("list", cmd_list, help_text="Switch to list <name>.")
registry.register("newlist", cmd_newlist, help_text="Create list <name> and switch to it.")
registry.register("filter", cmd_filter, help_text="Filter tasks: /filter all | active | completed.")
registry.register("search", cmd_search, help_text="Search tasks by text (no argument clears).")
registry.register("accent", cmd_accent, help_text="Pick the accent color: /accent <color>.")
registry.register("dark", cmd_dark, help_text="Toggle theme: /dark on | /dark off.")
registry.register("exit", cmd_exit, help_text="Quit the console.", aliases=["quit"])
