"""Optional render target registry.

Render targets are named widget slots. Each one is bound at most once,
at startup, and only if a widget with the target's id exists and offers
the operations the reconciler needs for that kind of target. Unbound
targets are skipped silently on every reconciliation pass.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterator, Optional, Tuple

from ..util.log import Log

log = Log.create({"service": "tui.render_targets"})


class TargetKind(str, Enum):
    TEXT = "text"
    INDICATOR = "indicator"
    BUTTON = "button"
    SELECTOR = "selector"


class RenderTarget(str, Enum):
    """Named render targets; values are the widget ids."""

    CURRENT_SERVER = "current-server"
    STATUS_INDICATOR = "server-status-indicator"
    UPTIME = "uptime"
    AUTO_SWITCH_STATUS = "auto-switch-status"
    AUTO_SWITCH_BUTTON = "auto-switch-btn"
    ERROR_COUNT = "error-count"
    GOROUTINE_COUNT = "goroutine-count"
    MEMORY_USAGE = "memory-usage"
    MEMORY_ALLOC = "memory-alloc"
    NAIVE_VERSION = "naive-version"
    SWITCHER_VERSION = "switcher-version"
    LAST_UPDATE = "last-update"
    DOWN_STATS = "down-stats"
    SERVER_SELECT = "server-select"
    SWITCH_BUTTON = "switch-btn"
    REFRESH_COUNTDOWN = "refresh-countdown"

    @property
    def kind(self) -> TargetKind:
        return TARGET_KINDS.get(self, TargetKind.TEXT)


TARGET_KINDS: Dict[RenderTarget, TargetKind] = {
    RenderTarget.STATUS_INDICATOR: TargetKind.INDICATOR,
    RenderTarget.AUTO_SWITCH_STATUS: TargetKind.INDICATOR,
    RenderTarget.ERROR_COUNT: TargetKind.INDICATOR,
    RenderTarget.AUTO_SWITCH_BUTTON: TargetKind.BUTTON,
    RenderTarget.SWITCH_BUTTON: TargetKind.BUTTON,
    RenderTarget.SERVER_SELECT: TargetKind.SELECTOR,
}

_REQUIRED: Dict[TargetKind, Tuple[str, ...]] = {
    TargetKind.TEXT: ("update",),
    TargetKind.INDICATOR: ("update", "set_class"),
    TargetKind.BUTTON: ("label", "variant", "disabled"),
    TargetKind.SELECTOR: ("rebuild",),
}


def supports(kind: TargetKind, widget: Any) -> bool:
    """Capability check for binding ``widget`` as a target of ``kind``."""
    return all(hasattr(widget, name) for name in _REQUIRED[kind])


class RenderRegistry:
    """Bindings from render targets to the widgets that are present."""

    def __init__(self) -> None:
        self._bindings: Dict[RenderTarget, Any] = {}

    def __contains__(self, target: RenderTarget) -> bool:
        return target in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def bind(self, target: RenderTarget, widget: Any) -> bool:
        if widget is None:
            return False
        if target in self._bindings:
            raise ValueError(f"render target already bound: {target.value}")
        if not supports(target.kind, widget):
            log.warning(
                "render target lacks required capability",
                {"target": target.value, "kind": target.kind.value, "widget": type(widget).__name__},
            )
            return False
        self._bindings[target] = widget
        return True

    def bind_from(self, root: Any) -> "RenderRegistry":
        """Bind every target whose id resolves under ``root``.

        ``root`` is any DOM node offering ``query_one_optional``.
        """
        for target in RenderTarget:
            self.bind(target, root.query_one_optional(f"#{target.value}"))
        log.debug("render targets bound", {"count": len(self._bindings)})
        return self

    def get(self, target: RenderTarget) -> Optional[Any]:
        return self._bindings.get(target)

    def items(self) -> Iterator[Tuple[RenderTarget, Any]]:
        return iter(list(self._bindings.items()))
