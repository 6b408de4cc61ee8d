# tests/test_task_codec.py

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest

from tickbox.tasks.task_codec import (
    decode_bool,
    decode_lists,
    decode_tasks,
    encode_bool,
    encode_lists,
    encode_tasks,
    format_timestamp,
)
from tickbox.tasks.task_models import Task


def test_tasks_survive_encode_decode() -> None:
    tasks = (
        Task(id="1", text="Buy milk", list="Default"),
        Task(id="2", text="Ship it", list="Work", completed=True, due_date=datetime(2027, 3, 5, 9, 0)),
        Task(
            id="3",
            text="Call",
            list="Personal",
            due_date=datetime(2027, 3, 5, 9, 0, 30, 250000, tzinfo=timezone(timedelta(hours=2))),
        ),
    )
    assert decode_tasks(encode_tasks(tasks)) == tasks


def test_decode_ignores_key_order_and_unknown_fields() -> None:
    raw = json.dumps(
        [
            {
                "list": "Work",
                "dueDate": "2027-03-05T08:00:00.000Z",
                "completed": True,
                "text": "Reorder",
                "extra": 1,
                "id": "1700000000000",
            }
        ]
    )
    (task,) = decode_tasks(raw)
    assert task == Task(
        id="1700000000000",
        text="Reorder",
        list="Work",
        completed=True,
        due_date=datetime(2027, 3, 5, 8, 0, tzinfo=timezone.utc),
    )


def test_decode_skips_malformed_records() -> None:
    raw = json.dumps(
        [
            {"id": "1", "text": "ok", "list": "Default", "completed": False, "dueDate": None},
            {"text": "no id", "list": "Default"},
            "not a record",
            {"id": "3", "list": "Default"},
        ]
    )
    assert [t.id for t in decode_tasks(raw)] == ["1"]


def test_completed_flag_must_be_a_real_bool() -> None:
    raw = json.dumps(
        [
            {"id": "1", "text": "a", "list": "Default", "completed": "false"},
            {"id": "2", "text": "b", "list": "Default", "completed": 1},
            {"id": "3", "text": "c", "list": "Default", "completed": True},
            {"id": "4", "text": "d", "list": "Default"},
        ]
    )
    assert [t.completed for t in decode_tasks(raw)] == [False, False, True, False]


def test_decode_rejects_non_array_payloads() -> None:
    with pytest.raises(ValueError):
        decode_tasks('{"id": "1"}')
    with pytest.raises(ValueError):
        decode_tasks("not json")
    with pytest.raises(ValueError):
        decode_lists("[]")


def test_aware_timestamps_are_written_as_utc() -> None:
    value = datetime(2027, 3, 5, 10, 0, tzinfo=timezone(timedelta(hours=1)))
    assert format_timestamp(value) == "2027-03-05T09:00:00Z"
    assert format_timestamp(None) is None


def test_lists_and_flags() -> None:
    assert decode_lists(encode_lists(["Default", "Work", "Ünïcode"])) == ("Default", "Work", "Ünïcode")
    assert decode_lists('["A", "A", "", 3, "B"]') == ("A", "B")
    assert encode_bool(True) == "true"
    assert encode_bool(False) == "false"
    assert decode_bool("true") is True
    assert decode_bool("false") is False
    assert decode_bool("garbage") is False
