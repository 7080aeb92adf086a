"""Main panel application.

This module provides the Textual application class for the switcher
control panel and the helpers that build it from configuration.
"""

from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.widget import Widget
from textual.widgets import Button, Footer, Header, Static

from ..api_client import SwitcherAPIClient
from ..core.config_schema import Config
from ..util.log import Log
from .bindings import APP_BINDINGS, BUTTON_ACTIONS
from .controller import PanelController
from .dialogs import AlertDialog, ConfirmDialog, TextViewerDialog
from .log_viewer import LogViewer
from .state.panel_state import COUNTDOWN_START
from .state.selectors import PAUSE_LABEL, PLACEHOLDER, SWITCH_LABEL, UNKNOWN_SERVER
from .widgets import ServerSelector, StatLine

log = Log.create({"service": "tui.app"})


def _stat_row(label: str, *widgets: Widget) -> Horizontal:
    return Horizontal(Static(label, classes="stat-label"), *widgets, classes="stat-row")


def _section(title: str, *children: Widget) -> Vertical:
    return Vertical(Static(title, classes="section-title"), *children, classes="section")


class PanelApp(App):
    """Terminal control panel for the switcher backend.

    The app is the hosting surface: it composes the render targets, binds
    whichever exist at mount time, and acts as the command UI (confirm and
    alert dialogs) for the dispatcher.
    """

    TITLE = "Switch Panel"

    CSS = """
    Screen {
        background: $background;
    }

    #panel {
        padding: 0 1;
    }

    .section {
        height: auto;
        border: round $primary;
        padding: 0 1;
        margin-bottom: 1;
    }

    .section-title {
        text-style: bold;
        color: $accent;
    }

    .stat-row {
        height: auto;
    }

    .stat-label {
        width: 20;
        color: $text-muted;
    }

    #server-status-indicator {
        width: 2;
    }

    #down-stats {
        height: auto;
    }

    .actions {
        height: auto;
    }

    .actions Button {
        margin-right: 1;
    }
    """

    BINDINGS = APP_BINDINGS

    def __init__(
        self,
        client: SwitcherAPIClient,
        *,
        poll_interval: int = COUNTDOWN_START,
        resync_delay: float = 2.0,
        tick_seconds: float = 1.0,
        owns_client: bool = True,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.client = client
        self.owns_client = owns_client
        self.controller = PanelController(
            client,
            self,
            poll_interval=poll_interval,
            resync_delay=resync_delay,
            tick_seconds=tick_seconds,
        )
        self.sub_title = str(client.base_url)

        log.info("panel app initialized", {
            "base_url": self.sub_title,
            "poll_interval": poll_interval,
            "resync_delay": resync_delay,
        })

    def compose(self) -> ComposeResult:
        yield Header()
        with VerticalScroll(id="panel"):
            yield _section(
                "Server",
                _stat_row(
                    "Current server",
                    StatLine("●", id="server-status-indicator"),
                    StatLine(UNKNOWN_SERVER, id="current-server"),
                ),
                _stat_row("Uptime", StatLine(PLACEHOLDER, id="uptime")),
                _stat_row("Error count", StatLine("0", id="error-count")),
                _stat_row("Auto switch", StatLine(PLACEHOLDER, id="auto-switch-status")),
                Horizontal(
                    Button(PAUSE_LABEL, id="auto-switch-btn"),
                    Button("Switch to best server", variant="warning", id="switch-best-btn"),
                    classes="actions",
                ),
            )
            yield _section(
                "Runtime",
                _stat_row("Goroutines", StatLine(PLACEHOLDER, id="goroutine-count")),
                _stat_row("Memory usage", StatLine(PLACEHOLDER, id="memory-usage")),
                _stat_row("Memory allocated", StatLine(PLACEHOLDER, id="memory-alloc")),
                _stat_row("Naive version", StatLine(PLACEHOLDER, id="naive-version")),
                _stat_row("Switcher version", StatLine(PLACEHOLDER, id="switcher-version")),
            )
            yield _section(
                "Servers",
                ServerSelector(id="server-select"),
                Horizontal(
                    Button(SWITCH_LABEL, variant="primary", id="switch-btn", disabled=True),
                    classes="actions",
                ),
            )
            yield _section(
                "Server failures",
                Static("", id="down-stats"),
            )
            yield Horizontal(
                Button("Logs", id="logs-btn"),
                Button("Refresh subscription", id="subscription-btn"),
                Button("Ping servers", id="ping-btn"),
                Button("Check updates", id="update-btn"),
                classes="actions",
            )
            yield _stat_row(
                "Last updated",
                StatLine("", id="last-update"),
                Static("next refresh in", classes="stat-label"),
                StatLine(f"{self.controller.state.countdown}s", id="refresh-countdown"),
            )
        yield Footer()

    async def on_mount(self) -> None:
        self.controller.registry.bind_from(self.screen)
        await self.controller.start()

    async def on_unmount(self) -> None:
        """Stop polling and release the client before the app exits."""
        await self.controller.stop()
        if self.owns_client:
            await self.client.aclose()

    # Command UI

    async def confirm(self, message: str) -> bool:
        return bool(await self.push_screen_wait(ConfirmDialog(message)))

    async def alert(self, message: str, *, error: bool = False) -> None:
        title = "Error" if error else "Notice"
        await self.push_screen_wait(AlertDialog(message, title=title, error=error))

    # Events

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        action = BUTTON_ACTIONS.get(event.button.id or "")
        if action is None:
            return
        event.stop()
        await self.run_action(action)

    async def on_server_selector_changed(self, event: ServerSelector.Changed) -> None:
        await self.controller.select_server(event.server)

    # Actions

    def action_switch_best(self) -> None:
        self.run_worker(self.controller.dispatcher.switch_to_best(), exclusive=False)

    def action_switch_selected(self) -> None:
        self.run_worker(self.controller.dispatcher.switch_to_selected(), exclusive=False)

    def action_toggle_auto_switch(self) -> None:
        self.run_worker(self.controller.dispatcher.toggle_auto_switch(), exclusive=False)

    def action_check_updates(self) -> None:
        self.run_worker(self.controller.dispatcher.check_updates(), exclusive=False)

    def action_show_logs(self) -> None:
        self._open_viewer(self.controller.logs_viewer())

    def action_show_subscription(self) -> None:
        self._open_viewer(self.controller.subscription_viewer())

    def action_show_ping(self) -> None:
        self._open_viewer(self.controller.ping_viewer())

    def _open_viewer(self, viewer: LogViewer) -> None:
        self.push_screen(TextViewerDialog(viewer))


def create_panel_app(config: Config) -> PanelApp:
    """Build a panel app with its own API client from ``config``."""
    client = SwitcherAPIClient(
        base_url=config.base_url,
        timeout=config.request_timeout,
    )
    return PanelApp(
        client,
        poll_interval=config.poll_interval,
        resync_delay=config.resync_delay,
    )


def run_panel(config: Config) -> None:
    """Run the panel until the user quits."""
    create_panel_app(config).run()


async def run_panel_async(config: Config) -> None:
    await create_panel_app(config).run_async()
