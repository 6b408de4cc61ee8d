# src/tickbox/tasks/task_codec.py

"""
Wire format for the persisted keys.

Every key holds the whole collection as a string:
- TODOS         -> JSON array of task records
- LISTS         -> JSON array of list names
- CURRENT_LIST  -> plain string
- ACCENT_COLOR  -> plain string (hex)
- DARK_MODE     -> "true" / "false"

Decoders raise ValueError on a payload they cannot use at all; a single bad
task record inside an otherwise valid array is skipped.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from .task_models import Task

logger = logging.getLogger(__name__)

TODOS_KEY = "TODOS"
LISTS_KEY = "LISTS"
CURRENT_LIST_KEY = "CURRENT_LIST"
ACCENT_COLOR_KEY = "ACCENT_COLOR"
DARK_MODE_KEY = "DARK_MODE"

PERSISTED_KEYS = (TODOS_KEY, LISTS_KEY, CURRENT_LIST_KEY, ACCENT_COLOR_KEY, DARK_MODE_KEY)


def format_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.isoformat()
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def parse_timestamp(raw: Any) -> datetime | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime):
        return raw
    if not isinstance(raw, str):
        raise ValueError(f"timestamp must be a string, got {type(raw).__name__}")
    return datetime.fromisoformat(raw.strip())


def task_to_record(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "text": task.text,
        "completed": task.completed,
        "dueDate": format_timestamp(task.due_date),
        "list": task.list,
    }


def record_to_task(record: Any) -> Task:
    if not isinstance(record, dict):
        raise ValueError("task record must be an object")

    task_id = record.get("id")
    text = record.get("text")
    list_name = record.get("list")
    if not isinstance(task_id, str) or not task_id:
        raise ValueError("task record is missing an id")
    if not isinstance(text, str):
        raise ValueError(f"task {task_id} has no text")
    if not isinstance(list_name, str):
        raise ValueError(f"task {task_id} has no list")

    return Task(
        id=task_id,
        text=text,
        list=list_name,
        completed=record.get("completed") is True,
        due_date=parse_timestamp(record.get("dueDate")),
    )


def encode_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps([task_to_record(t) for t in tasks], ensure_ascii=False)


def decode_tasks(raw: str) -> tuple[Task, ...]:
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError("TODOS payload must be a JSON array")

    out: list[Task] = []
    for record in data:
        try:
            out.append(record_to_task(record))
        except ValueError as e:
            logger.debug("Skipping malformed task record: %s", e)
    return tuple(out)


def encode_lists(lists: Iterable[str]) -> str:
    return json.dumps(list(lists), ensure_ascii=False)


def decode_lists(raw: str) -> tuple[str, ...]:
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError("LISTS payload must be a JSON array")

    out: list[str] = []
    for name in data:
        if isinstance(name, str) and name and name not in out:
            out.append(name)
    if not out:
        raise ValueError("LISTS payload has no usable names")
    return tuple(out)


def encode_bool(value: bool) -> str:
    return "true" if value else "false"


def decode_bool(raw: str) -> bool:
    return raw.strip().lower() == "true"
