"""Base and generic dialog components."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Static


class DialogBase(ModalScreen):
    """Base class for modal dialogs."""

    DEFAULT_CSS = """
    DialogBase {
        align: center middle;
    }

    DialogBase > Container {
        width: 60;
        height: auto;
        max-height: 80%;
        background: $surface;
        border: thick $primary;
        padding: 1 2;
    }

    DialogBase .dialog-title {
        text-style: bold;
        padding-bottom: 1;
    }

    DialogBase .dialog-content {
        height: auto;
        max-height: 20;
    }

    DialogBase .dialog-buttons {
        height: 3;
        align: right middle;
        padding-top: 1;
    }

    DialogBase Button {
        margin-left: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def action_cancel(self) -> None:
        self.dismiss(None)


class ConfirmDialog(DialogBase):
    """Yes/no question; dismisses with True only on confirm."""

    def __init__(
        self,
        message: str,
        title: str = "Confirm",
        confirm_label: str = "OK",
        cancel_label: str = "Cancel",
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.title_text = title
        self.message = message
        self.confirm_label = confirm_label
        self.cancel_label = cancel_label

    def compose(self) -> ComposeResult:
        yield Container(
            Static(self.title_text, classes="dialog-title", markup=False),
            Static(self.message, classes="dialog-content", markup=False),
            Horizontal(
                Button(self.cancel_label, variant="default", id="cancel-btn"),
                Button(self.confirm_label, variant="primary", id="confirm-btn"),
                classes="dialog-buttons",
            ),
        )

    def on_mount(self) -> None:
        self.query_one("#confirm-btn", Button).focus()

    def action_cancel(self) -> None:
        self.dismiss(False)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "confirm-btn")


class AlertDialog(DialogBase):
    """Message with an OK button."""

    DEFAULT_CSS = DialogBase.DEFAULT_CSS + """
    AlertDialog.-error > Container {
        border: thick $error;
    }
    """

    def __init__(self, message: str, title: str = "Notice", *, error: bool = False, **kwargs) -> None:
        super().__init__(**kwargs)
        self.title_text = title
        self.message = message
        self.set_class(error, "-error")

    def compose(self) -> ComposeResult:
        yield Container(
            Static(self.title_text, classes="dialog-title", markup=False),
            Static(self.message, classes="dialog-content", markup=False),
            Horizontal(
                Button("OK", variant="primary", id="ok-btn"),
                classes="dialog-buttons",
            ),
        )

    def on_mount(self) -> None:
        self.query_one("#ok-btn", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(True)
