"""Projection of status snapshots onto the bound render targets."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Dict, Optional, Tuple

from rich.text import Text

from ..util.log import Log
from .render_targets import RenderRegistry, RenderTarget, TargetKind
from .state import PanelState, PanelView
from .state.panel_view import STATUS_TIERS, ButtonState, StatusTier
from .state.selectors import select_panel_view, switch_button

log = Log.create({"service": "tui.reconciler"})

STATUS_DOT = "●"

_TEXT_VALUES: Dict[RenderTarget, Callable[[PanelView], str]] = {
    RenderTarget.CURRENT_SERVER: lambda view: view.current_server,
    RenderTarget.UPTIME: lambda view: view.uptime,
    RenderTarget.GOROUTINE_COUNT: lambda view: view.goroutine_count,
    RenderTarget.MEMORY_USAGE: lambda view: view.memory_usage,
    RenderTarget.MEMORY_ALLOC: lambda view: view.memory_alloc,
    RenderTarget.NAIVE_VERSION: lambda view: view.naive_version,
    RenderTarget.SWITCHER_VERSION: lambda view: view.switcher_version,
    RenderTarget.LAST_UPDATE: lambda view: view.last_updated,
    RenderTarget.DOWN_STATS: lambda view: view.down_stats,
}

_INDICATOR_VALUES: Dict[RenderTarget, Callable[[PanelView], Tuple[str, StatusTier]]] = {
    RenderTarget.STATUS_INDICATOR: lambda view: (STATUS_DOT, view.status_tier),
    RenderTarget.AUTO_SWITCH_STATUS: lambda view: (view.paused_label, view.paused_tier),
    RenderTarget.ERROR_COUNT: lambda view: (view.error_count, view.status_tier),
}

_BUTTON_VALUES: Dict[RenderTarget, Callable[[PanelView], ButtonState]] = {
    RenderTarget.AUTO_SWITCH_BUTTON: lambda view: view.toggle_button,
    RenderTarget.SWITCH_BUTTON: lambda view: view.switch_button,
}


def render_text(widget: Any, value: str) -> None:
    widget.update(Text(value))


def render_indicator(widget: Any, value: str, tier: StatusTier) -> None:
    widget.update(Text(value))
    for name in STATUS_TIERS:
        widget.set_class(name == tier, f"-{name}")


def render_button(widget: Any, state: ButtonState) -> None:
    widget.label = state.label
    widget.variant = state.variant
    widget.disabled = state.disabled


class ViewReconciler:
    """Reconcile panel state onto whichever render targets are bound."""

    def __init__(
        self,
        registry: RenderRegistry,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.registry = registry
        self._clock = clock

    def project(self, state: PanelState) -> Optional[PanelView]:
        if state.snapshot is None:
            return None
        return select_panel_view(state.snapshot, selection=state.selection, now=self._clock())

    def reconcile(self, state: PanelState) -> Optional[PanelView]:
        """Render the current snapshot; drops a selection the backend no longer lists."""
        view = self.project(state)
        if view is None:
            return None
        if state.selection != view.selection:
            log.debug("selection cleared", {"previous": state.selection})
        state.selection = view.selection
        state.last_updated = self._clock()
        self.apply(view)
        return view

    def apply(self, view: PanelView) -> None:
        for target, widget in self.registry.items():
            kind = target.kind
            if kind is TargetKind.TEXT and target in _TEXT_VALUES:
                render_text(widget, _TEXT_VALUES[target](view))
            elif kind is TargetKind.INDICATOR:
                value, tier = _INDICATOR_VALUES[target](view)
                render_indicator(widget, value, tier)
            elif kind is TargetKind.BUTTON:
                render_button(widget, _BUTTON_VALUES[target](view))
            elif kind is TargetKind.SELECTOR:
                widget.rebuild(view.server_options, view.selection)

    def refresh_switch_button(self, state: PanelState) -> ButtonState:
        """Recompute the switch action after the user changes the selection."""
        button = switch_button(state.selection, state.current_server)
        widget = self.registry.get(RenderTarget.SWITCH_BUTTON)
        if widget is not None:
            render_button(widget, button)
        return button

    def render_countdown(self, remaining: int) -> None:
        widget = self.registry.get(RenderTarget.REFRESH_COUNTDOWN)
        if widget is not None:
            render_text(widget, f"{remaining}s")
