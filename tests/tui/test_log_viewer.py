import httpx
import pytest

from switchpanel.api_client import ApiClientError
from switchpanel.tui.log_viewer import LogViewer, logs_source, ping_source, subscription_source
from tests.helpers import FakeClient


@pytest.mark.anyio
async def test_logs_are_shown_verbatim_and_scrolled_to_end() -> None:
    client = FakeClient()
    viewer = LogViewer(logs_source(client))

    assert viewer.loading.text == "Loading logs..."
    view = await viewer.load()

    assert view.state == "loaded"
    assert view.text == "line 1\nline 2\n"
    assert view.scroll_to_end is True
    assert client.calls == [("logs",)]


@pytest.mark.anyio
async def test_whitespace_only_logs_show_empty_text() -> None:
    client = FakeClient()
    client.logs = "  \n\t"

    view = await LogViewer(logs_source(client)).load()

    assert view.state == "empty"
    assert view.text == "No logs yet"
    assert view.scroll_to_end is False


@pytest.mark.anyio
@pytest.mark.parametrize(
    ("error", "text"),
    [
        (ApiClientError(500, "HTTP 500 for GET /api/logs"), "Error loading logs: HTTP 500 for GET /api/logs"),
        (httpx.ConnectError("connection refused"), "Error loading logs: connection refused"),
    ],
)
async def test_log_fetch_failure_is_inline_error(error: Exception, text: str) -> None:
    class FailingClient(FakeClient):
        async def get_logs(self) -> str:
            raise error

    view = await LogViewer(logs_source(FailingClient())).load()

    assert view.state == "error"
    assert view.text == text


@pytest.mark.anyio
async def test_each_load_fetches_again() -> None:
    client = FakeClient()
    viewer = LogViewer(logs_source(client))

    await viewer.load()
    await viewer.load()

    assert client.calls == [("logs",), ("logs",)]


@pytest.mark.anyio
async def test_report_sources_use_their_endpoints() -> None:
    client = FakeClient()

    subscription = await LogViewer(subscription_source(client)).load()
    ping = await LogViewer(ping_source(client)).load()

    assert subscription.text == "pool: 3 servers\n"
    assert ping.text == "1.2.3.4: 12ms\n"
    assert client.calls == [("subscription",), ("ping",)]
