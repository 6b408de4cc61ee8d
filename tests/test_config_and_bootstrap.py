# tests/test_config_and_bootstrap.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tickbox.cli.bootstrap import create_services, shutdown, start
from tickbox.config import Settings
from tickbox.core.commands import SubmitTask
from tickbox.logging_setup import _ConsoleNoiseFilter, setup_logging


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TICKBOX_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TICKBOX_LOG_LEVEL", "debug")
    monkeypatch.setenv("TICKBOX_REMINDERS_ENABLED", "off")
    monkeypatch.setenv("TICKBOX_REMINDER_POLL_SECONDS", "not-a-number")
    monkeypatch.delenv("TICKBOX_STORE_DB_PATH", raising=False)
    monkeypatch.delenv("TICKBOX_LOG_DIR", raising=False)

    s = Settings.from_env()

    assert s.data_dir == tmp_path
    assert s.store_db_path == tmp_path / "store.sqlite3"
    assert s.log_dir == tmp_path
    assert s.log_level == "DEBUG"
    assert s.reminders_enabled is False
    assert s.reminder_poll_seconds == 15.0


@pytest.mark.asyncio
async def test_services_persist_between_sessions(settings: Settings) -> None:
    services = await start(create_services(settings=settings))
    services.manager.dispatch(SubmitTask(text="Buy milk"))
    await shutdown(services)

    again = await start(create_services(settings=settings))
    assert [t.text for t in again.manager.state.tasks] == ["Buy milk"]
    assert settings.store_db_path.exists()


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_mutes_storage_chatter() -> None:
    f = _ConsoleNoiseFilter()
    assert f.filter(_record("tickbox.storage.kv_store", logging.INFO)) is False
    assert f.filter(_record("tickbox.storage.kv_store", logging.WARNING)) is True
    assert f.filter(_record("tickbox.core.manager", logging.DEBUG)) is True
    assert f.filter(_record("py.warnings", logging.WARNING)) is False
    assert f.filter(_record("asyncio", logging.ERROR)) is True


def test_setup_logging_writes_file(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        log_file = setup_logging(log_dir=tmp_path / "logs")
        setup_logging(log_dir=tmp_path / "logs")
        assert len(root.handlers) == 2

        logging.getLogger("tickbox.test").debug("hello log")
        for h in root.handlers:
            h.flush()
        assert log_file == tmp_path / "logs" / "tickbox.log"
        assert "hello log" in log_file.read_text(encoding="utf-8")
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
        logging.captureWarnings(False)
