# src/tickbox/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.commands import EXIT_COMMANDS, render_view
from ..core.commands import SubmitTask
from ..core.manager import StateManager

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


class ConsoleNotifier:
    """Notifier port that prints reminders into the console."""

    async def send_text(self, *, title: str, body: str) -> None:
        _print_ts(f"[{title}] {body}")


async def run_console_loop(manager: StateManager, *, app_name: str = "tickbox") -> None:
    """
    Interactive presentation layer.

    Reads lines in a worker thread so the event loop keeps running background
    writes and reminders while waiting for input. Plain text (no leading "/")
    is added as a task to the current list.
    """
    logger.info("Console connector started.")
    _print_ts(f"[{app_name}] Type a task to add it. Use /help for commands. Use /exit to quit.\n")
    print(render_view(manager.state), flush=True)

    while True:
        try:
            user_input = (await asyncio.to_thread(input, ">>> ")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in EXIT_COMMANDS:
            logger.info("Console exit command received.")
            print(command_registry.handle(manager, user_input), flush=True)
            break

        try:
            reply = command_registry.handle(manager, user_input)
            if reply is None:
                manager.dispatch(SubmitTask(text=user_input))
                reply = render_view(manager.state)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        print(reply, flush=True)

    logger.info("Console connector finished.")
