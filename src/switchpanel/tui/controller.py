"""Panel controller: owns the panel state and wires its collaborators.

The controller creates the state object, the event bus and every
component that reads or writes the state, then routes events between them
through a subscription table built once in ``start``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, List, Optional, Tuple

from ..core.bus import Bus, BusEvent, EventPayload, SubscriptionCallback
from ..util.log import Log
from .dispatcher import DEFAULT_RESYNC_DELAY, CommandDispatcher, CommandUI
from .events import PanelEvent, SelectionChangedProps
from .log_viewer import LogViewer, logs_source, ping_source, subscription_source
from .reconciler import ViewReconciler
from .render_targets import RenderRegistry
from .scheduler import CountdownScheduler
from .state import COUNTDOWN_START, PanelState, ScreenSubscriptions
from .syncer import StatusSyncer

log = Log.create({"service": "tui.controller"})

SubscriptionTable = List[Tuple[BusEvent, SubscriptionCallback]]


class PanelController:
    """Synchronization loop, reconciliation and command dispatch for one panel."""

    def __init__(
        self,
        client: Any,
        ui: CommandUI,
        registry: Optional[RenderRegistry] = None,
        *,
        poll_interval: int = COUNTDOWN_START,
        resync_delay: float = DEFAULT_RESYNC_DELAY,
        tick_seconds: float = 1.0,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.client = client
        self.state = PanelState(countdown=poll_interval)
        self.bus = Bus()
        self.registry = registry if registry is not None else RenderRegistry()
        self.reconciler = ViewReconciler(self.registry, clock=clock)
        self.syncer = StatusSyncer(client, self.state, self.bus)
        self.scheduler = CountdownScheduler(
            self.syncer.request,
            on_render=self._render_countdown,
            interval=poll_interval,
            tick_seconds=tick_seconds,
        )
        self.dispatcher = CommandDispatcher(
            client,
            self.state,
            self.bus,
            ui,
            resync_delay=resync_delay,
        )
        self._subscriptions = ScreenSubscriptions()
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    def subscription_table(self) -> SubscriptionTable:
        return [
            (PanelEvent.StatusSynced, self._on_status_synced),
            (PanelEvent.ResyncRequested, self._on_resync_requested),
            (PanelEvent.SelectionChanged, self._on_selection_changed),
        ]

    async def start(self) -> None:
        """Subscribe, fetch once immediately and start the countdown."""
        if self._started:
            return
        for event, callback in self.subscription_table():
            self._subscriptions.add(self.bus.subscribe(event, callback))
        self._started = True
        log.info("panel started", {"interval": self.scheduler.interval, "bindings": len(self.registry)})
        self.syncer.request()
        self.scheduler.start()

    async def stop(self) -> None:
        if not self._started:
            return
        self._started = False
        await self.scheduler.stop()
        await self.syncer.aclose()
        self._subscriptions.clear()
        log.info("panel stopped")

    async def select_server(self, server: Optional[str]) -> None:
        await self.bus.publish(PanelEvent.SelectionChanged, SelectionChangedProps(server=server or None))

    def logs_viewer(self) -> LogViewer:
        return LogViewer(logs_source(self.client))

    def subscription_viewer(self) -> LogViewer:
        return LogViewer(subscription_source(self.client))

    def ping_viewer(self) -> LogViewer:
        return LogViewer(ping_source(self.client))

    def _render_countdown(self, remaining: int) -> None:
        self.state.countdown = remaining
        self.reconciler.render_countdown(remaining)

    def _on_status_synced(self, payload: EventPayload) -> None:
        self.reconciler.reconcile(self.state)

    def _on_resync_requested(self, payload: EventPayload) -> None:
        delay = float(payload.properties.get("delay") or 0.0)
        log.debug("resync requested", {"delay": delay, "reason": payload.properties.get("reason")})
        self.syncer.request_later(delay)

    def _on_selection_changed(self, payload: EventPayload) -> None:
        self.state.selection = payload.properties.get("server")
        self.reconciler.refresh_switch_button(self.state)
