# src/tickbox/core/manager.py

from __future__ import annotations

"""
State manager (outer driver).

Owns the current AppState for the lifetime of the process:
- load(): read every persisted key concurrently, defaulting each one independently
- dispatch(): apply a command synchronously, then run its effects in the background

Effects are fire-and-forget for the caller. Their outcome is still recorded as an
EffectResult so failures are visible in logs and tests, never to the user.
"""

import asyncio
import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..tasks.task_codec import (
    ACCENT_COLOR_KEY,
    CURRENT_LIST_KEY,
    DARK_MODE_KEY,
    LISTS_KEY,
    TODOS_KEY,
    decode_bool,
    decode_lists,
    decode_tasks,
)
from ..tasks.task_models import ACCENT_COLORS, DEFAULT_LIST, Task
from .commands import Command, Effect, PersistKey, ScheduleReminder, apply
from .ports import KeyValueStore, NotificationScheduler
from .state import AppState
from .views import visible_tasks

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class EffectResult:
    effect: Effect
    ok: bool
    error: str | None = None


def _decode_accent(raw: str) -> str:
    color = raw.strip().lower()
    if color not in ACCENT_COLORS:
        raise ValueError(f"unknown accent color {raw!r}")
    return color


def _decode_current_list(raw: str) -> str:
    if not raw:
        raise ValueError("empty current list")
    return raw


_DECODERS: dict[str, Callable[[str], Any]] = {
    TODOS_KEY: decode_tasks,
    LISTS_KEY: decode_lists,
    CURRENT_LIST_KEY: _decode_current_list,
    ACCENT_COLOR_KEY: _decode_accent,
    DARK_MODE_KEY: decode_bool,
}

_FIELDS = {
    TODOS_KEY: "tasks",
    LISTS_KEY: "lists",
    CURRENT_LIST_KEY: "current_list",
    ACCENT_COLOR_KEY: "accent_color",
    DARK_MODE_KEY: "dark_mode",
}


class StateManager:
    def __init__(
        self,
        store: KeyValueStore,
        reminders: NotificationScheduler,
        *,
        state: AppState | None = None,
    ) -> None:
        self._store = store
        self._reminders = reminders
        self._state = state if state is not None else AppState()
        self._inflight: set[asyncio.Task[EffectResult]] = set()
        # Writes to one key land in dispatch order (asyncio.Lock is FIFO).
        self._write_locks: dict[str, asyncio.Lock] = {}
        # Most recent effect outcomes, oldest first.
        self.results: deque[EffectResult] = deque(maxlen=256)

    @property
    def state(self) -> AppState:
        return self._state

    def visible_tasks(self) -> list[Task]:
        return visible_tasks(self._state)

    # ---- startup ----

    async def _load_key(self, key: str) -> Any | None:
        try:
            raw = await self._store.get(key)
        except Exception:
            logger.warning("Failed to read %s; using default.", key, exc_info=True)
            return None
        if raw is None:
            return None
        try:
            return _DECODERS[key](raw)
        except ValueError as e:
            logger.warning("Ignoring unreadable %s (%s); using default.", key, e)
            return None

    async def load(self) -> AppState:
        """Load persisted state. Missing or unreadable keys keep their defaults."""
        keys = list(_DECODERS)
        values = await asyncio.gather(*(self._load_key(k) for k in keys))

        defaults = AppState()
        loaded: dict[str, Any] = {}
        for key, value in zip(keys, values):
            loaded[_FIELDS[key]] = getattr(defaults, _FIELDS[key]) if value is None else value

        # CURRENT_LIST and LISTS are written separately; either write may be lost.
        if loaded["current_list"] not in loaded["lists"]:
            fallback = DEFAULT_LIST if DEFAULT_LIST in loaded["lists"] else loaded["lists"][0]
            logger.warning(
                "Current list %r is not a known list; using %r.", loaded["current_list"], fallback
            )
            loaded["current_list"] = fallback

        self._state = AppState(
            tasks=loaded["tasks"],
            lists=loaded["lists"],
            current_list=loaded["current_list"],
            accent_color=loaded["accent_color"],
            dark_mode=loaded["dark_mode"],
        )
        logger.info(
            "State loaded: tasks=%d lists=%d current=%s",
            len(self._state.tasks),
            len(self._state.lists),
            self._state.current_list,
        )
        return self._state

    # ---- commands ----

    def dispatch(self, command: Command) -> AppState:
        """
        Apply `command` and start its effects without awaiting them.

        Must be called from the event loop thread.
        """
        transition = apply(self._state, command)
        self._state = transition.state
        for effect in transition.effects:
            task = asyncio.get_running_loop().create_task(self._run_effect(effect))
            self._inflight.add(task)
            task.add_done_callback(self._inflight.discard)
        if transition.effects:
            logger.debug(
                "%s -> %d effect(s)", type(command).__name__, len(transition.effects)
            )
        return self._state

    async def drain(self) -> list[EffectResult]:
        """Wait for every in-flight effect. Returns all results recorded so far."""
        while self._inflight:
            await asyncio.gather(*list(self._inflight))
        return list(self.results)

    # ---- effects ----

    async def _run_effect(self, effect: Effect) -> EffectResult:
        try:
            if isinstance(effect, PersistKey):
                lock = self._write_locks.setdefault(effect.key, asyncio.Lock())
                async with lock:
                    await self._store.set(effect.key, effect.value)
            elif isinstance(effect, ScheduleReminder):
                await self._reminders.schedule(text=effect.text, due_at=effect.due_at)
            else:
                raise TypeError(f"Unsupported effect: {type(effect).__name__}")
            result = EffectResult(effect=effect, ok=True)
        except Exception as e:
            logger.warning("Effect %s failed: %s", type(effect).__name__, e, exc_info=True)
            result = EffectResult(effect=effect, ok=False, error=f"{type(e).__name__}: {e}")
        self.results.append(result)
        return result

