# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from tickbox.config import Settings
from tickbox.core.manager import StateManager

from .fakes import FakeReminders, FakeStore


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a per-test directory; never reads the real environment."""
    return Settings(
        app_name="tickbox-test",
        log_level="DEBUG",
        log_dir=tmp_path / "logs",
        console_enabled=False,
        reminders_enabled=False,
        reminder_poll_seconds=0.5,
        data_dir=tmp_path,
        store_db_path=tmp_path / "store.sqlite3",
    )


@pytest.fixture()
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture()
def reminders() -> FakeReminders:
    return FakeReminders()


@pytest.fixture()
def manager(store: FakeStore, reminders: FakeReminders) -> StateManager:
    """StateManager wired with deterministic fakes."""
    return StateManager(store, reminders)
