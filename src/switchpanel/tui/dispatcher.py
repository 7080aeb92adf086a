"""Administrative commands against the switcher backend.

Commands never touch the snapshot or the paused flag. A successful switch
or toggle publishes a resync request; the next snapshot carries the
backend-confirmed result.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol

import httpx

from ..api_client import ApiClientError, CommandResult
from ..core.bus import Bus
from ..util.log import Log
from .events import PanelEvent, ResyncRequestedProps
from .state import PanelState

log = Log.create({"service": "tui.dispatcher"})

GENERIC_ERROR = "unknown error"
DEFAULT_RESYNC_DELAY = 2.0

CONFIRM_SWITCH_BEST = "Switch to the best available server?"
SWITCHING_BEST = "Switching to the best server..."
SWITCHING_SELECTED = "Switching to the selected server..."
UPDATE_STARTED = "Update check started, see the logs for the result."

COMMAND_ERRORS = (ApiClientError, httpx.HTTPError, ValueError)


class CommandUI(Protocol):
    """User-facing side of command dispatch."""

    async def confirm(self, message: str) -> bool: ...

    async def alert(self, message: str, *, error: bool = False) -> None: ...


def failure_message(result: CommandResult) -> str:
    return f"Error: {result.error or GENERIC_ERROR}"


class CommandDispatcher:
    """Fire-and-report command dispatch with resync scheduling."""

    def __init__(
        self,
        client: Any,
        state: PanelState,
        bus: Bus,
        ui: CommandUI,
        *,
        resync_delay: float = DEFAULT_RESYNC_DELAY,
    ) -> None:
        self._client = client
        self.state = state
        self._bus = bus
        self._ui = ui
        self.resync_delay = resync_delay

    async def _request_resync(self, delay: float, reason: str) -> None:
        await self._bus.publish(
            PanelEvent.ResyncRequested,
            ResyncRequestedProps(delay=delay, reason=reason),
        )

    async def _report_failure(self, command: str, result: CommandResult) -> None:
        log.warning("command rejected", {"command": command, "error": result.error})
        await self._ui.alert(failure_message(result), error=True)

    async def _report_exception(self, command: str, prefix: str, exc: Exception) -> None:
        log.error("command failed", {"command": command, "error": exc})
        await self._ui.alert(f"{prefix}: {exc}", error=True)

    async def switch_to_best(self) -> Optional[CommandResult]:
        """Switch away from the current server after confirmation."""
        if not await self._ui.confirm(CONFIRM_SWITCH_BEST):
            return None

        avoid = self.state.current_server or None
        try:
            result = await self._client.switch_avoid(avoid)
        except COMMAND_ERRORS as e:
            await self._report_exception("switch.avoid", "Error switching server", e)
            return None

        if not result.success:
            await self._report_failure("switch.avoid", result)
            return result

        log.info("switch requested", {"type": "avoid", "avoid_server": avoid})
        await self._request_resync(self.resync_delay, "switch.avoid")
        await self._ui.alert(SWITCHING_BEST)
        return result

    async def switch_to_selected(self) -> Optional[CommandResult]:
        """Switch to the selected server after confirmation; no-op without a selection."""
        target = self.state.selection
        if not target:
            return None
        if not await self._ui.confirm(f"Switch to {target}?"):
            return None

        try:
            result = await self._client.switch_select(target)
        except COMMAND_ERRORS as e:
            await self._report_exception("switch.select", "Error switching server", e)
            return None

        if not result.success:
            await self._report_failure("switch.select", result)
            return result

        log.info("switch requested", {"type": "select", "target_server": target})
        await self._request_resync(self.resync_delay, "switch.select")
        await self._ui.alert(SWITCHING_SELECTED)
        return result

    async def toggle_auto_switch(self) -> Optional[CommandResult]:
        """Pause when running, resume when paused, as of the last snapshot."""
        action = "resume" if self.state.paused else "pause"
        try:
            result = await self._client.set_auto_switch(action)
        except COMMAND_ERRORS as e:
            await self._report_exception(f"auto_switch.{action}", "Error toggling auto switch", e)
            return None

        if not result.success:
            await self._report_failure(f"auto_switch.{action}", result)
            return result

        log.info("auto switch toggled", {"action": action})
        await self._request_resync(0.0, f"auto_switch.{action}")
        return result

    async def check_updates(self) -> Optional[CommandResult]:
        """Trigger an asynchronous update check; results show up in the logs."""
        try:
            result = await self._client.trigger_update()
        except COMMAND_ERRORS as e:
            await self._report_exception("update", "Error checking for updates", e)
            return None

        if not result.success:
            await self._report_failure("update", result)
            return result

        log.info("update check triggered")
        await self._ui.alert(UPDATE_STARTED)
        return result
