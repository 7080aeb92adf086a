from __future__ import annotations

from typing import Any, Dict, List, Optional, Set

from switchpanel.api_client import CommandResult


def status_payload(**overrides: Any) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "current_server": "srvA",
        "error_count": 0,
        "uptime": "1h2m3s",
        "auto_switch_paused": False,
        "goroutine_count": 12,
        "memory_usage_mb": "3.50",
        "memory_alloc_mb": "7.25",
        "naive_version": "v1.2.3-45-abcdef",
        "switcher_version": "1.2.3",
        "down_stats": {},
        "available_servers": ["srvA", "srvB", "srvC"],
    }
    data.update(overrides)
    return {"success": True, "data": data}


class FakeClient:
    """In-memory stand-in for SwitcherAPIClient."""

    def __init__(
        self,
        statuses: Optional[List[Any]] = None,
        result: Optional[CommandResult] = None,
    ) -> None:
        self.statuses = list(statuses or [status_payload()])
        self.result = result or CommandResult(success=True)
        self.calls: List[tuple] = []
        self.logs = "line 1\nline 2\n"
        self.base_url = "http://switcher.test"

    async def get_status(self) -> Any:
        self.calls.append(("status",))
        item = self.statuses.pop(0) if len(self.statuses) > 1 else self.statuses[0]
        if isinstance(item, Exception):
            raise item
        return item

    async def switch_avoid(self, avoid_server: Optional[str]) -> CommandResult:
        self.calls.append(("avoid", avoid_server))
        return self._command_result()

    async def switch_select(self, target_server: str) -> CommandResult:
        self.calls.append(("select", target_server))
        return self._command_result()

    async def set_auto_switch(self, action: str) -> CommandResult:
        self.calls.append(("auto_switch", action))
        return self._command_result()

    async def trigger_update(self) -> CommandResult:
        self.calls.append(("update",))
        return self._command_result()

    async def get_logs(self) -> str:
        self.calls.append(("logs",))
        return self.logs

    async def refresh_subscription(self) -> str:
        self.calls.append(("subscription",))
        return "pool: 3 servers\n"

    async def ping_servers(self) -> str:
        self.calls.append(("ping",))
        return "1.2.3.4: 12ms\n"

    async def aclose(self) -> None:
        self.calls.append(("close",))

    def _command_result(self) -> CommandResult:
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


class RecordingUI:
    """Command UI that answers confirms from a queue and records alerts."""

    def __init__(self, answers: Optional[List[bool]] = None) -> None:
        self.answers = list(answers or [])
        self.confirms: List[str] = []
        self.alerts: List[tuple[str, bool]] = []

    async def confirm(self, message: str) -> bool:
        self.confirms.append(message)
        return self.answers.pop(0) if self.answers else True

    async def alert(self, message: str, *, error: bool = False) -> None:
        self.alerts.append((message, error))


class FakeText:
    def __init__(self) -> None:
        self.content: Any = None
        self.classes: Set[str] = set()

    def update(self, content: Any) -> None:
        self.content = content

    def set_class(self, add: bool, name: str) -> None:
        if add:
            self.classes.add(name)
        else:
            self.classes.discard(name)

    @property
    def text(self) -> str:
        return str(self.content)


class FakeButton:
    def __init__(self) -> None:
        self.label = ""
        self.variant = "default"
        self.disabled = False


class FakeSelector:
    def __init__(self) -> None:
        self.rebuilds: List[tuple] = []

    def rebuild(self, options, selection: Optional[str]) -> None:
        self.rebuilds.append((tuple(options), selection))


class FakeRoot:
    """Minimal DOM root resolving ``#id`` queries from a dict."""

    def __init__(self, widgets: Dict[str, Any]) -> None:
        self.widgets = widgets

    def query_one_optional(self, selector: str) -> Any:
        return self.widgets.get(selector.lstrip("#"))
