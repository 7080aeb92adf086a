"""Key binding definitions for the panel application."""

from textual.binding import Binding

APP_BINDINGS = [
    Binding("b", "switch_best", "Best server", show=True),
    Binding("s", "switch_selected", "Switch", show=True),
    Binding("p", "toggle_auto_switch", "Pause/Resume", show=True),
    Binding("u", "check_updates", "Update", show=True),
    Binding("l", "show_logs", "Logs", show=True),
    Binding("r", "show_subscription", "Subscription", show=False),
    Binding("g", "show_ping", "Ping", show=False),
    Binding("q", "quit", "Quit", show=True),
    Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
]

BUTTON_ACTIONS = {
    "switch-best-btn": "switch_best",
    "switch-btn": "switch_selected",
    "auto-switch-btn": "toggle_auto_switch",
    "update-btn": "check_updates",
    "logs-btn": "show_logs",
    "subscription-btn": "show_subscription",
    "ping-btn": "show_ping",
}
