"""Scrollable viewer for backend logs and text reports."""

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, VerticalScroll
from textual.widgets import Button, Static

from ..log_viewer import LogViewer, TextView
from .base import DialogBase


class TextViewerDialog(DialogBase):
    """Loads its text once on open and shows it verbatim.

    Closes on escape, the Close button, or a click outside the dialog box.
    """

    DEFAULT_CSS = DialogBase.DEFAULT_CSS + """
    TextViewerDialog > Container {
        width: 90%;
        height: 80%;
        max-height: 80%;
    }

    TextViewerDialog #text-scroll {
        height: 1fr;
        background: $surface-darken-1;
        padding: 0 1;
    }

    TextViewerDialog #text-body.-loading,
    TextViewerDialog #text-body.-empty {
        color: $text-muted;
    }

    TextViewerDialog #text-body.-error {
        color: $error;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Close"),
    ]

    def __init__(self, viewer: LogViewer, **kwargs) -> None:
        super().__init__(**kwargs)
        self.viewer = viewer
        self.current_view: TextView = viewer.loading

    def compose(self) -> ComposeResult:
        yield Container(
            Static(self.viewer.title, classes="dialog-title", markup=False),
            VerticalScroll(
                Static(self.current_view.text, id="text-body", classes="-loading", markup=False),
                id="text-scroll",
            ),
            Horizontal(
                Button("Close", variant="default", id="close-btn"),
                classes="dialog-buttons",
            ),
        )

    def on_mount(self) -> None:
        self.run_worker(self._load(), exclusive=True)

    async def _load(self) -> None:
        self.show_view(await self.viewer.load())

    def show_view(self, view: TextView) -> None:
        self.current_view = view
        body = self.query_one("#text-body", Static)
        body.update(Text(view.text))
        for state in ("loading", "empty", "loaded", "error"):
            body.set_class(state == view.state, f"-{state}")
        if view.scroll_to_end:
            self.query_one("#text-scroll", VerticalScroll).scroll_end(animate=False)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(None)

    def on_click(self, event: events.Click) -> None:
        if event.widget is self:
            self.dismiss(None)
