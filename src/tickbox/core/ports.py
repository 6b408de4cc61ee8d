# src/tickbox/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The state manager depends on Protocols instead of concrete implementations.
This keeps storage and reminder delivery swappable and makes testing easier.
"""

from datetime import datetime
from typing import Awaitable, Protocol


class KeyValueStore(Protocol):
    """
    Durable string-keyed storage.

    No transactions and no cross-key atomicity. Implementations raise on failure;
    the state manager decides what to do with the error.
    """

    def get(self, key: str) -> Awaitable[str | None]: ...
    def set(self, key: str, value: str) -> Awaitable[None]: ...
    def remove(self, key: str) -> Awaitable[None]: ...


class NotificationScheduler(Protocol):
    """Schedules a local reminder carrying the task text. No cancel, no reschedule."""

    def schedule(self, *, text: str, due_at: datetime) -> Awaitable[None]: ...


class Notifier(Protocol):
    """
    Delivery-side port: how the reminder loop surfaces a reminder to the user.

    The console connector prints it; a desktop build could raise an OS notification.
    """

    def send_text(self, *, title: str, body: str) -> Awaitable[None]: ...
