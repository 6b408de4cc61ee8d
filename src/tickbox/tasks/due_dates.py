# src/tickbox/tasks/due_dates.py

from __future__ import annotations

from datetime import datetime, timedelta

from .task_codec import parse_timestamp


def _align(value: datetime, now: datetime) -> datetime:
    # Compare calendar days in now's timezone.
    if value.tzinfo is None:
        return value if now.tzinfo is None else value.replace(tzinfo=now.tzinfo)
    if now.tzinfo is None:
        return value.astimezone().replace(tzinfo=None)
    return value.astimezone(now.tzinfo)


def humanize_due_date(value: datetime | str | None, now: datetime | None = None) -> str | None:
    """
    Human-friendly label for a due date.

    Today, 09:05 AM / Tomorrow, 06:30 PM / Wed, 11:00 AM / 05 Mar 2027, 08:15 PM.
    "This week" is the Monday-started week containing `now`.
    """
    if value is None or value == "":
        return None

    due = parse_timestamp(value)
    if due is None:
        return None

    if now is None:
        now = datetime.now().astimezone() if due.tzinfo is not None else datetime.now()
    due = _align(due, now)

    clock = due.strftime("%I:%M %p")
    today = now.date()
    day = due.date()

    if day == today:
        return f"Today, {clock}"
    if day == today + timedelta(days=1):
        return f"Tomorrow, {clock}"

    week_start = today - timedelta(days=today.weekday())
    if week_start <= day < week_start + timedelta(days=7):
        return f"{due.strftime('%a')}, {clock}"

    return due.strftime("%d %b %Y, %I:%M %p")
