from datetime import datetime
from typing import Any

import pytest

from switchpanel.tui.reconciler import ViewReconciler
from switchpanel.tui.render_targets import RenderRegistry, RenderTarget, TargetKind, supports
from switchpanel.tui.state import PanelState, StatusSnapshot
from tests.helpers import FakeButton, FakeRoot, FakeSelector, FakeText, status_payload


def _clock() -> datetime:
    return datetime(2024, 1, 2, 3, 4, 5)


def _state(**overrides: Any) -> PanelState:
    state = PanelState()
    state.apply_snapshot(StatusSnapshot.model_validate(status_payload(**overrides)["data"]), state.next_sequence())
    return state


def test_capability_check_per_kind() -> None:
    assert supports(TargetKind.TEXT, FakeText())
    assert supports(TargetKind.INDICATOR, FakeText())
    assert supports(TargetKind.BUTTON, FakeButton())
    assert supports(TargetKind.SELECTOR, FakeSelector())
    assert not supports(TargetKind.BUTTON, FakeText())
    assert not supports(TargetKind.INDICATOR, FakeButton())


def test_registry_binds_present_capable_widgets_only() -> None:
    registry = RenderRegistry()

    assert registry.bind(RenderTarget.UPTIME, None) is False
    assert registry.bind(RenderTarget.SWITCH_BUTTON, FakeText()) is False
    assert registry.bind(RenderTarget.UPTIME, FakeText()) is True
    assert RenderTarget.UPTIME in registry
    assert RenderTarget.SWITCH_BUTTON not in registry
    assert len(registry) == 1

    with pytest.raises(ValueError):
        registry.bind(RenderTarget.UPTIME, FakeText())


def test_bind_from_resolves_ids_under_root() -> None:
    uptime = FakeText()
    button = FakeButton()
    registry = RenderRegistry().bind_from(FakeRoot({"uptime": uptime, "switch-btn": button}))

    assert registry.get(RenderTarget.UPTIME) is uptime
    assert registry.get(RenderTarget.SWITCH_BUTTON) is button
    assert registry.get(RenderTarget.CURRENT_SERVER) is None


def test_reconcile_renders_every_bound_target() -> None:
    widgets = {
        "current-server": FakeText(),
        "server-status-indicator": FakeText(),
        "uptime": FakeText(),
        "auto-switch-status": FakeText(),
        "auto-switch-btn": FakeButton(),
        "error-count": FakeText(),
        "memory-usage": FakeText(),
        "naive-version": FakeText(),
        "switcher-version": FakeText(),
        "last-update": FakeText(),
        "down-stats": FakeText(),
        "server-select": FakeSelector(),
        "switch-btn": FakeButton(),
    }
    reconciler = ViewReconciler(RenderRegistry().bind_from(FakeRoot(widgets)), clock=_clock)
    state = _state(error_count=7, auto_switch_paused=True, down_stats={"srvC": 7})
    state.selection = "srvB"

    view = reconciler.reconcile(state)

    assert view is not None
    assert widgets["current-server"].text == "srvA"
    assert widgets["server-status-indicator"].text == "●"
    assert widgets["server-status-indicator"].classes == {"-error"}
    assert widgets["error-count"].text == "7"
    assert widgets["error-count"].classes == {"-error"}
    assert widgets["auto-switch-status"].text == "● Paused"
    assert widgets["auto-switch-status"].classes == {"-warning"}
    assert widgets["auto-switch-btn"].label == "▶ Resume auto switch"
    assert widgets["auto-switch-btn"].variant == "success"
    assert widgets["memory-usage"].text == "3.50 MB"
    assert widgets["naive-version"].text == "v1.2.3-45"
    assert widgets["switcher-version"].text == "v1.2.3"
    assert widgets["last-update"].text == "03:04:05"
    assert widgets["down-stats"].text == "srvC: 7"
    options, selection = widgets["server-select"].rebuilds[-1]
    assert [option.value for option in options] == ["srvA", "srvB", "srvC"]
    assert options[0].disabled is True
    assert selection == "srvB"
    assert widgets["switch-btn"].disabled is False
    assert state.last_updated == _clock()


def test_reconcile_tier_classes_follow_latest_snapshot() -> None:
    indicator = FakeText()
    reconciler = ViewReconciler(
        RenderRegistry().bind_from(FakeRoot({"server-status-indicator": indicator})),
        clock=_clock,
    )

    reconciler.reconcile(_state(error_count=3))
    assert indicator.classes == {"-warning"}

    reconciler.reconcile(_state(error_count=0))
    assert indicator.classes == {"-online"}


def test_reconcile_with_no_bindings_is_a_no_op() -> None:
    reconciler = ViewReconciler(RenderRegistry(), clock=_clock)

    assert reconciler.reconcile(_state()) is not None
    assert reconciler.reconcile(PanelState()) is None


def test_reconcile_drops_selection_no_longer_listed() -> None:
    switch_btn = FakeButton()
    reconciler = ViewReconciler(RenderRegistry().bind_from(FakeRoot({"switch-btn": switch_btn})), clock=_clock)
    state = _state(available_servers=["srvA", "srvC"])
    state.selection = "srvB"

    reconciler.reconcile(state)

    assert state.selection is None
    assert switch_btn.disabled is True


def test_refresh_switch_button_tracks_selection() -> None:
    switch_btn = FakeButton()
    reconciler = ViewReconciler(RenderRegistry().bind_from(FakeRoot({"switch-btn": switch_btn})), clock=_clock)
    state = _state()

    state.selection = "srvB"
    assert reconciler.refresh_switch_button(state).disabled is False
    assert switch_btn.disabled is False

    state.selection = "srvA"
    reconciler.refresh_switch_button(state)
    assert switch_btn.disabled is True


def test_render_countdown_only_when_bound() -> None:
    countdown = FakeText()
    ViewReconciler(RenderRegistry(), clock=_clock).render_countdown(2)
    reconciler = ViewReconciler(
        RenderRegistry().bind_from(FakeRoot({"refresh-countdown": countdown})),
        clock=_clock,
    )

    reconciler.render_countdown(2)

    assert countdown.text == "2s"
