"""Selectors that derive panel view models from a status snapshot."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from .panel_view import ButtonState, PanelView, ServerOption, StatusTier
from .snapshot import StatusSnapshot

PLACEHOLDER = "--"
UNKNOWN_SERVER = "unknown"
NO_FAILURES_TEXT = "No recorded server failures"
CURRENT_SUFFIX = " (current)"
PAUSED_TEXT = "Paused"
RUNNING_TEXT = "Running"
RESUME_LABEL = "▶ Resume auto switch"
PAUSE_LABEL = "⏸ Pause auto switch"
SWITCH_LABEL = "Switch to selected"

_NAIVE_VERSION_PATTERN = re.compile(r"(v[\d.]+(?:-\d+)?)-")


def status_tier(error_count: int) -> StatusTier:
    """0 errors is online, 1-5 a warning, anything above an error."""
    if error_count > 5:
        return "error"
    if error_count > 0:
        return "warning"
    return "online"


def format_naive_version(version: Optional[str]) -> str:
    if not version:
        return PLACEHOLDER
    match = _NAIVE_VERSION_PATTERN.search(version)
    return match.group(1) if match else version


def format_switcher_version(version: Optional[str]) -> str:
    if not version:
        return PLACEHOLDER
    if version == PLACEHOLDER or version.startswith("v"):
        return version
    return f"v{version}"


def format_memory(value: Optional[float]) -> str:
    if value is None:
        return PLACEHOLDER
    return f"{value:.2f} MB"


def format_count(value: Optional[int]) -> str:
    return PLACEHOLDER if value is None else str(value)


def format_down_stats(down_stats: Mapping[str, int]) -> str:
    if not down_stats:
        return NO_FAILURES_TEXT
    return "\n".join(f"{server}: {count}" for server, count in down_stats.items())


def paused_display(paused: bool) -> Tuple[str, StatusTier, ButtonState]:
    """Status label, its tier and the toggle button offering the inverse action."""
    if paused:
        return f"● {PAUSED_TEXT}", "warning", ButtonState(label=RESUME_LABEL, variant="success")
    return f"● {RUNNING_TEXT}", "online", ButtonState(label=PAUSE_LABEL, variant="default")


def build_server_options(
    servers: Iterable[str],
    current_server: Optional[str],
) -> Tuple[ServerOption, ...]:
    options: List[ServerOption] = []
    seen = set()
    for server in servers:
        if server in seen:
            continue
        seen.add(server)
        is_current = server == current_server
        options.append(
            ServerOption(
                value=server,
                label=server + (CURRENT_SUFFIX if is_current else ""),
                disabled=is_current,
            )
        )
    return tuple(options)


def restore_selection(previous: Optional[str], servers: Sequence[str]) -> Optional[str]:
    """Keep the previous selection only while the backend still lists it."""
    if previous and previous in servers:
        return previous
    return None


def can_switch_to(selection: Optional[str], current_server: Optional[str]) -> bool:
    return bool(selection) and selection != current_server


def switch_button(selection: Optional[str], current_server: Optional[str]) -> ButtonState:
    return ButtonState(
        label=SWITCH_LABEL,
        variant="primary",
        disabled=not can_switch_to(selection, current_server),
    )


def select_panel_view(
    snapshot: StatusSnapshot,
    *,
    selection: Optional[str] = None,
    now: Optional[datetime] = None,
) -> PanelView:
    """Project one snapshot (plus the user's selection) onto display values."""
    now = now or datetime.now()
    paused_label, paused_tier, toggle = paused_display(snapshot.auto_switch_paused)
    servers = snapshot.available_servers
    restored = restore_selection(selection, servers)

    return PanelView(
        current_server=snapshot.current_server or UNKNOWN_SERVER,
        status_tier=status_tier(snapshot.error_count),
        uptime=snapshot.uptime or PLACEHOLDER,
        paused=snapshot.auto_switch_paused,
        paused_label=paused_label,
        paused_tier=paused_tier,
        toggle_button=toggle,
        error_count=str(snapshot.error_count),
        goroutine_count=format_count(snapshot.goroutine_count),
        memory_usage=format_memory(snapshot.memory_usage_mb),
        memory_alloc=format_memory(snapshot.memory_alloc_mb),
        naive_version=format_naive_version(snapshot.naive_version),
        switcher_version=format_switcher_version(snapshot.switcher_version),
        last_updated=now.strftime("%H:%M:%S"),
        down_stats=format_down_stats(snapshot.down_stats),
        server_options=build_server_options(servers, snapshot.current_server),
        selection=restored,
        switch_button=switch_button(restored, snapshot.current_server),
    )
