# src/tickbox/tasks/reminder_scheduler.py

from __future__ import annotations

"""
Reminder scheduler.

ReminderScheduler implements the NotificationScheduler port by queueing
reminders in memory. A small polling loop:
- takes the reminders that are due,
- delivers each one through an injected Notifier port,
- forgets it whether delivery worked or not.

There is no cancel/reschedule: editing or deleting a task leaves its reminder alone.
Reminders live only as long as the process.
"""

import asyncio
import itertools
import logging
import time
from dataclasses import dataclass
from datetime import datetime

from ..core.ports import Notifier
from .task_models import REMINDER_TITLE

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class Reminder:
    seq: int
    text: str
    due_at: datetime

    @property
    def due_ts(self) -> float:
        # Naive datetimes are local time, same as datetime.timestamp() assumes.
        return self.due_at.timestamp()


class ReminderScheduler:
    """In-process NotificationScheduler; pending reminders ordered by due time."""

    def __init__(self) -> None:
        self._pending: list[Reminder] = []
        self._seq = itertools.count(1)

    def __len__(self) -> int:
        return len(self._pending)

    @property
    def pending(self) -> list[Reminder]:
        return list(self._pending)

    async def schedule(self, *, text: str, due_at: datetime) -> None:
        if not text or not text.strip():
            raise ValueError("reminder text is required")
        reminder = Reminder(seq=next(self._seq), text=text, due_at=due_at)
        self._pending.append(reminder)
        self._pending.sort(key=lambda r: (r.due_ts, r.seq))
        logger.debug("Reminder scheduled seq=%s due_at=%s", reminder.seq, due_at.isoformat())

    def pop_due(self, *, now_ts: float, limit: int = 32) -> list[Reminder]:
        """Remove and return reminders with due_at <= now_ts (oldest first)."""
        due: list[Reminder] = []
        while self._pending and len(due) < limit and self._pending[0].due_ts <= now_ts:
            due.append(self._pending.pop(0))
        return due


async def deliver_due_reminders(
        scheduler: ReminderScheduler,
        notifier: Notifier,
        *,
        now_ts: float,
        batch_limit: int = 32,
) -> int:
    """One polling pass. Returns how many reminders were delivered successfully."""
    delivered = 0
    for reminder in scheduler.pop_due(now_ts=now_ts, limit=batch_limit):
        try:
            await notifier.send_text(title=REMINDER_TITLE, body=reminder.text)
            delivered += 1
            logger.info("Reminder %s delivered", reminder.seq)
        except Exception:
            # No retries.
            logger.exception("Reminder delivery failed seq=%s", reminder.seq)
    return delivered


async def run_reminder_loop(
        scheduler: ReminderScheduler,
        notifier: Notifier,
        *,
        interval_seconds: float = 15.0,
        batch_limit: int = 32,
) -> None:
    """
    Simple polling loop.

    Every interval_seconds deliver whatever became due.
    To stop the loop, cancel the coroutine/task.
    """
    sleep_s = max(0.01, float(interval_seconds))

    while True:
        now_ts = time.time()
        await deliver_due_reminders(scheduler, notifier, now_ts=now_ts, batch_limit=int(batch_limit))
        await asyncio.sleep(sleep_s)
