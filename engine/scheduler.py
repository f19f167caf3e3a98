"""Periodic callback scheduling injected by the host.

The engine never touches a wall clock: the round director asks a Scheduler
for a 1 Hz callback and cancels the returned handle on every round
transition. ``ManualScheduler`` drives callbacks from tests or a headless
host; ``AsyncioScheduler`` runs them on the API server's event loop.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Protocol

from loguru import logger


class TimerHandle(Protocol):
    def cancel(self) -> None: ...

    @property
    def cancelled(self) -> bool: ...


class Scheduler(Protocol):
    def call_every(self, interval: float, callback: Callable[[], object]) -> TimerHandle: ...


class ManualTimer:
    """A repeating timer fired by ManualScheduler.advance()."""

    def __init__(self, interval: float, callback: Callable[[], object]) -> None:
        self.interval = interval
        self.callback = callback
        self.remaining = interval
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler:
    """Scheduler whose clock only moves when told to."""

    def __init__(self) -> None:
        self.timers: list[ManualTimer] = []

    def call_every(self, interval: float, callback: Callable[[], object]) -> ManualTimer:
        timer = ManualTimer(interval, callback)
        self.timers.append(timer)
        return timer

    @property
    def active_timers(self) -> list[ManualTimer]:
        return [t for t in self.timers if not t.cancelled]

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing every due callback in order."""
        remaining = seconds
        while remaining > 0:
            active = self.active_timers
            if not active:
                break
            step = min(remaining, min(t.remaining for t in active))
            remaining -= step
            for timer in active:
                timer.remaining -= step
            for timer in active:
                # A callback may cancel other timers
                if timer.remaining <= 0 and not timer.cancelled:
                    timer.remaining = timer.interval
                    timer.callback()
        self.timers = self.active_timers

    def tick(self, count: int = 1) -> None:
        """Fire each active timer ``count`` times, one interval at a time."""
        for _ in range(count):
            active = self.active_timers
            if not active:
                return
            self.advance(min(t.remaining for t in active))


class AsyncioTimer:
    """Repeating callback running as a task on an asyncio loop."""

    def __init__(self, interval: float, callback: Callable[[], object]) -> None:
        self._cancelled = False
        self._task = asyncio.get_running_loop().create_task(self._run(interval, callback))

    async def _run(self, interval: float, callback: Callable[[], object]) -> None:
        while True:
            await asyncio.sleep(interval)
            try:
                callback()
            except Exception:
                logger.exception("Scheduled callback failed")

    def cancel(self) -> None:
        self._cancelled = True
        self._task.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancelled or self._task.done()


class AsyncioScheduler:
    """Scheduler for hosts running an asyncio event loop."""

    def call_every(self, interval: float, callback: Callable[[], object]) -> AsyncioTimer:
        return AsyncioTimer(interval, callback)
