"""View model projected from a status snapshot.

Every render target reads from one ``PanelView`` so a reconciliation
pass never mixes values from two snapshots.
"""

from dataclasses import dataclass, field
from typing import Literal, Optional, Tuple

StatusTier = Literal["online", "warning", "error"]
STATUS_TIERS: Tuple[StatusTier, ...] = ("online", "warning", "error")


@dataclass(frozen=True)
class ServerOption:
    """One entry of the server selector."""

    value: str
    label: str
    disabled: bool = False


@dataclass(frozen=True)
class ButtonState:
    label: str
    variant: str = "default"
    disabled: bool = False


@dataclass(frozen=True)
class PanelView:
    """Normalized display values for every render target."""

    current_server: str = "unknown"
    status_tier: StatusTier = "online"
    uptime: str = "--"
    paused: bool = False
    paused_label: str = ""
    paused_tier: StatusTier = "online"
    toggle_button: ButtonState = field(default_factory=lambda: ButtonState(label=""))
    error_count: str = "0"
    goroutine_count: str = "--"
    memory_usage: str = "--"
    memory_alloc: str = "--"
    naive_version: str = "--"
    switcher_version: str = "--"
    last_updated: str = ""
    down_stats: str = ""
    server_options: Tuple[ServerOption, ...] = ()
    selection: Optional[str] = None
    switch_button: ButtonState = field(default_factory=lambda: ButtonState(label="", disabled=True))
