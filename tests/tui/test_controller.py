import asyncio
from datetime import datetime

import pytest

from switchpanel.tui.controller import PanelController
from switchpanel.tui.events import PanelEvent
from switchpanel.tui.render_targets import RenderRegistry
from tests.helpers import FakeButton, FakeClient, FakeRoot, FakeSelector, FakeText, RecordingUI, status_payload


async def _settle() -> None:
    for _ in range(10):
        await asyncio.sleep(0)


def _controller(client: FakeClient, widgets: dict, **kwargs) -> PanelController:
    registry = RenderRegistry().bind_from(FakeRoot(widgets))
    return PanelController(
        client,
        RecordingUI(),
        registry,
        tick_seconds=kwargs.pop("tick_seconds", 60),
        clock=lambda: datetime(2024, 1, 1, 12, 0, 0),
        **kwargs,
    )


@pytest.mark.anyio
async def test_start_fetches_immediately_and_renders() -> None:
    client = FakeClient()
    current = FakeText()
    controller = _controller(client, {"current-server": current})

    await controller.start()
    await _settle()

    assert client.calls == [("status",)]
    assert current.text == "srvA"
    assert controller.scheduler.running
    await controller.stop()


@pytest.mark.anyio
async def test_selection_change_updates_switch_button() -> None:
    client = FakeClient()
    switch_btn = FakeButton()
    selector = FakeSelector()
    controller = _controller(client, {"switch-btn": switch_btn, "server-select": selector})
    await controller.start()
    await _settle()
    assert switch_btn.disabled is True

    await controller.select_server("srvB")
    assert controller.state.selection == "srvB"
    assert switch_btn.disabled is False

    await controller.select_server("srvA")
    assert switch_btn.disabled is True

    await controller.stop()


@pytest.mark.anyio
async def test_toggle_resyncs_through_subscription_table() -> None:
    client = FakeClient(statuses=[status_payload(), status_payload(auto_switch_paused=True)])
    status = FakeText()
    controller = _controller(client, {"auto-switch-status": status})
    await controller.start()
    await _settle()
    assert status.text == "● Running"

    await controller.dispatcher.toggle_auto_switch()
    await _settle()

    assert client.calls == [("status",), ("auto_switch", "pause"), ("status",)]
    assert status.text == "● Paused"
    assert controller.state.paused is True
    await controller.stop()


@pytest.mark.anyio
async def test_countdown_drives_polling() -> None:
    client = FakeClient()
    countdown = FakeText()
    controller = _controller(client, {"refresh-countdown": countdown}, poll_interval=1, tick_seconds=0.001)

    await controller.start()
    while len([c for c in client.calls if c == ("status",)]) < 3:
        await asyncio.sleep(0.001)
    await controller.stop()

    assert countdown.text in {"0s", "1s"}
    assert controller.state.countdown in {0, 1}


@pytest.mark.anyio
async def test_stop_releases_subscriptions_and_timers() -> None:
    client = FakeClient()
    controller = _controller(client, {})
    await controller.start()
    await _settle()
    assert controller.bus.subscriber_count(PanelEvent.StatusSynced) == 1

    controller.syncer.request_later(60)
    await controller.stop()

    assert controller.bus.subscriber_count(PanelEvent.StatusSynced) == 0
    assert controller.bus.subscriber_count(PanelEvent.ResyncRequested) == 0
    assert controller.bus.subscriber_count(PanelEvent.SelectionChanged) == 0
    assert controller.syncer.scheduled == 0
    assert not controller.scheduler.running
    assert not controller.started


@pytest.mark.anyio
async def test_text_viewers_are_independent_of_polling() -> None:
    client = FakeClient()
    controller = _controller(client, {})

    view = await controller.logs_viewer().load()

    assert view.text == "line 1\nline 2\n"
    assert client.calls == [("logs",)]


def test_screen_subscriptions_release_all_even_if_one_fails() -> None:
    from switchpanel.tui.state import ScreenSubscriptions

    released: list[str] = []
    subscriptions = ScreenSubscriptions()

    def broken() -> None:
        raise RuntimeError("already gone")

    subscriptions.add(lambda: released.append("first"))
    subscriptions.add(broken)
    subscriptions.add(lambda: released.append("last"))
    assert len(subscriptions) == 3

    subscriptions.clear()

    assert released == ["last", "first"]
    assert len(subscriptions) == 0
