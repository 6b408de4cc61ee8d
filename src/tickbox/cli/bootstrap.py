# src/tickbox/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the concrete store and reminder scheduler into a StateManager.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..config import Settings, get_settings
from ..core.manager import StateManager
from ..storage.kv_store import SqliteKeyValueStore
from ..tasks.reminder_scheduler import ReminderScheduler

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AppServices:
    settings: Settings
    store: SqliteKeyValueStore
    reminders: ReminderScheduler
    manager: StateManager


def _ensure_local_dirs(settings: Settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.store_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_services(*, settings: Settings | None = None) -> AppServices:
    """
    Build the object graph from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = SqliteKeyValueStore(settings.store_db_path)
    reminders = ReminderScheduler()
    return AppServices(
        settings=settings,
        store=store,
        reminders=reminders,
        manager=StateManager(store, reminders),
    )


async def start(services: AppServices) -> AppServices:
    """Load persisted state into the manager."""
    await services.manager.load()
    return services


async def shutdown(services: AppServices) -> None:
    """Best-effort shutdown: flush pending writes, report failures, close the store."""
    results = await services.manager.drain()
    failed = [r for r in results if not r.ok]
    if failed:
        logger.warning("%d of %d background effects failed this session.", len(failed), len(results))
    services.store.close()
