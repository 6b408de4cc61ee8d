# src/tickbox/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Every value has a default; a value that fails to parse falls back to it.

Environment variables:
  TICKBOX_APP_NAME           display name (default: tickbox)
  TICKBOX_LOG_LEVEL          console log level (default: INFO)
  TICKBOX_DATA_DIR           local data directory (default: .local/tickbox)
  TICKBOX_STORE_DB_PATH      key/value SQLite path (default: <data_dir>/store.sqlite3)
  TICKBOX_LOG_DIR            log file directory (default: <data_dir>)
  TICKBOX_CONSOLE_ENABLED    run the interactive console (default: true)
  TICKBOX_REMINDERS_ENABLED  deliver due-date reminders (default: true)
  TICKBOX_REMINDER_POLL_SECONDS  reminder polling interval (default: 15)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TICKBOX"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_dir: Path

    # ---- Connectors / services ----
    console_enabled: bool
    reminders_enabled: bool
    reminder_poll_seconds: float

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    store_db_path: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "tickbox").strip() or "tickbox"
        log_level = _env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO"

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/tickbox"))
        store_db_path = _env_path(_k("STORE_DB_PATH"), data_dir / "store.sqlite3")
        log_dir = _env_path(_k("LOG_DIR"), data_dir)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_dir=log_dir,
            console_enabled=_env_bool(_k("CONSOLE_ENABLED"), True),
            reminders_enabled=_env_bool(_k("REMINDERS_ENABLED"), True),
            reminder_poll_seconds=max(0.5, _env_float(_k("REMINDER_POLL_SECONDS"), 15.0)),
            data_dir=data_dir,
            store_db_path=store_db_path,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
