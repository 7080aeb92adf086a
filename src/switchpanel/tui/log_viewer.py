"""On-demand text views (backend logs and diagnostic reports).

Independent of the polling cycle: each ``load`` performs exactly one
fetch and is only called when the viewer is opened.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable, Literal

import httpx

from ..api_client import ApiClientError
from ..util.log import Log

log = Log.create({"service": "tui.log_viewer"})

TextViewState = Literal["loading", "empty", "loaded", "error"]


@dataclass(frozen=True)
class TextView:
    state: TextViewState
    text: str

    @property
    def scroll_to_end(self) -> bool:
        return self.state == "loaded"


@dataclass(frozen=True)
class TextSource:
    """A fetchable plain-text endpoint and its display texts."""

    title: str
    fetch: Callable[[], Awaitable[str]]
    loading_text: str = "Loading..."
    empty_text: str = "Nothing to show"
    error_prefix: str = "Error loading"


class LogViewer:
    """Fetch one text body and turn it into a displayable view."""

    def __init__(self, source: TextSource) -> None:
        self.source = source

    @property
    def title(self) -> str:
        return self.source.title

    @property
    def loading(self) -> TextView:
        return TextView(state="loading", text=self.source.loading_text)

    async def load(self) -> TextView:
        try:
            text = await self.source.fetch()
        except (ApiClientError, httpx.HTTPError) as e:
            log.warning("text fetch failed", {"title": self.source.title, "error": e})
            return TextView(state="error", text=f"{self.source.error_prefix}: {e}")

        if not text.strip():
            return TextView(state="empty", text=self.source.empty_text)
        return TextView(state="loaded", text=text)


def logs_source(client) -> TextSource:
    return TextSource(
        title="Logs",
        fetch=client.get_logs,
        loading_text="Loading logs...",
        empty_text="No logs yet",
        error_prefix="Error loading logs",
    )


def subscription_source(client) -> TextSource:
    return TextSource(
        title="Subscription",
        fetch=client.refresh_subscription,
        loading_text="Refreshing subscription...",
        empty_text="Empty subscription report",
        error_prefix="Error refreshing subscription",
    )


def ping_source(client) -> TextSource:
    return TextSource(
        title="Ping",
        fetch=client.ping_servers,
        loading_text="Pinging servers...",
        empty_text="No hosts to ping",
        error_prefix="Error pinging servers",
    )
