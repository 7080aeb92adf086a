"""Status synchronization against ``GET /api/status``.

At most one status fetch is in flight. Requests arriving meanwhile are
coalesced into a single follow-up fetch that starts once the current one
finishes, so a resync asked for after a command always observes state
fetched after that command. Snapshots are applied in fetch-issue order.
"""

from __future__ import annotations

import asyncio
from contextlib import suppress
from typing import Any, Optional, Set

import httpx
from pydantic import ValidationError

from ..api_client import ApiClientError
from ..core.bus import Bus
from ..util.log import Log
from .events import PanelEvent, StatusSyncedProps
from .state import PanelState, StatusEnvelope

log = Log.create({"service": "tui.syncer"})

FETCH_ERRORS = (ApiClientError, httpx.HTTPError, ValidationError, ValueError)


class StatusSyncer:
    """Owns the status fetch and the authoritative snapshot in ``state``."""

    def __init__(self, client: Any, state: PanelState, bus: Bus) -> None:
        self._client = client
        self.state = state
        self._bus = bus
        self._task: Optional[asyncio.Task[None]] = None
        self._pending = False
        self._timers: Set[asyncio.TimerHandle] = set()
        self._closed = False

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def scheduled(self) -> int:
        """Number of delayed resyncs not yet fired."""
        return len(self._timers)

    def request(self) -> Optional[asyncio.Task[None]]:
        """Ask for a status fetch; coalesces with one already running."""
        if self._closed:
            return None
        if self.in_flight:
            self._pending = True
            return self._task
        self._task = asyncio.get_running_loop().create_task(self._drain())
        return self._task

    def request_later(self, delay: float) -> None:
        """Ask for a status fetch after ``delay`` seconds."""
        if self._closed:
            return
        if delay <= 0:
            self.request()
            return

        loop = asyncio.get_running_loop()
        handle: Optional[asyncio.TimerHandle] = None

        def fire() -> None:
            self._timers.discard(handle)
            self.request()

        handle = loop.call_later(delay, fire)
        self._timers.add(handle)

    async def _drain(self) -> None:
        while True:
            self._pending = False
            await self.fetch_status()
            if not self._pending or self._closed:
                return

    async def fetch_status(self) -> bool:
        """Fetch once and apply the snapshot; failures keep the previous one."""
        sequence = self.state.next_sequence()
        try:
            raw = await self._client.get_status()
            envelope = StatusEnvelope.model_validate(raw)
        except FETCH_ERRORS as e:
            log.warning("status fetch failed", {"sequence": sequence, "error": e})
            return False

        if not envelope.success or envelope.data is None:
            error = envelope.error or "status response without data"
            log.warning("status fetch rejected", {"sequence": sequence, "error": error})
            return False

        if not self.state.apply_snapshot(envelope.data, sequence):
            log.debug("stale status dropped", {"sequence": sequence, "applied": self.state.applied_sequence})
            return False

        await self._bus.publish(PanelEvent.StatusSynced, StatusSyncedProps(sequence=sequence))
        return True

    async def aclose(self) -> None:
        self._closed = True
        for handle in list(self._timers):
            handle.cancel()
        self._timers.clear()
        task = self._task
        if task is not None and not task.done():
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task
