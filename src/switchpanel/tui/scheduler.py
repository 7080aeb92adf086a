"""Countdown-driven polling cadence."""

from __future__ import annotations

import asyncio
from contextlib import suppress
from typing import Callable, Optional

from ..util.log import Log
from .state.panel_state import COUNTDOWN_START

log = Log.create({"service": "tui.scheduler"})


class CountdownScheduler:
    """Tick once per ``tick_seconds``; fetch whenever the countdown hits zero.

    Each tick renders the remaining seconds, then either resets the counter
    and fires ``on_fetch`` (at zero) or decrements it.
    """

    def __init__(
        self,
        on_fetch: Callable[[], object],
        *,
        on_render: Optional[Callable[[int], None]] = None,
        interval: int = COUNTDOWN_START,
        tick_seconds: float = 1.0,
    ) -> None:
        if interval < 1:
            raise ValueError("interval must be at least 1 second")
        self._on_fetch = on_fetch
        self._on_render = on_render
        self.interval = interval
        self.tick_seconds = tick_seconds
        self.remaining = interval
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def tick(self) -> bool:
        """Advance one tick. Returns True if this tick triggered a fetch."""
        if self._on_render is not None:
            self._on_render(self.remaining)

        if self.remaining <= 0:
            self.remaining = self.interval
            self._on_fetch()
            return True

        self.remaining -= 1
        return False

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.tick_seconds)
            try:
                self.tick()
            except Exception as e:
                log.error("countdown tick failed", {"error": e})

    async def stop(self) -> None:
        task = self._task
        self._task = None
        if task is None or task.done():
            return
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task
