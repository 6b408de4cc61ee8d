# src/tickbox/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the services, loads persisted state, then runs:
- the reminder loop as a background asyncio task (optional),
- the console REPL (optional; otherwise waits until interrupted).
"""

from __future__ import annotations

import asyncio
import contextlib
import logging

from ..cli.bootstrap import AppServices, create_services, shutdown, start
from ..config import get_settings
from ..connectors.console_connector import ConsoleNotifier, run_console_loop
from ..logging_setup import setup_logging
from ..tasks.reminder_scheduler import run_reminder_loop

logger = logging.getLogger(__name__)


async def run(services: AppServices) -> None:
    settings = services.settings
    await start(services)

    reminder_task: asyncio.Task[None] | None = None
    if settings.reminders_enabled:
        reminder_task = asyncio.create_task(
            run_reminder_loop(
                services.reminders,
                ConsoleNotifier(),
                interval_seconds=settings.reminder_poll_seconds,
            )
        )

    try:
        if settings.console_enabled:
            await run_console_loop(services.manager, app_name=settings.app_name)
        else:
            logger.info("Console disabled. Running reminders only. Press Ctrl+C to stop.")
            await asyncio.Event().wait()
    finally:
        if reminder_task is not None:
            reminder_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await reminder_task
        await shutdown(services)


def main() -> None:
    settings = get_settings()

    console_level = getattr(logging, settings.log_level, logging.INFO)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)
    services = create_services(settings=settings)

    try:
        asyncio.run(run(services))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down...")
    logger.info("Bye.")


if __name__ == "__main__":
    main()
