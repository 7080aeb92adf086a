"""Panel widgets."""

from typing import Optional, Sequence, Tuple

from textual.binding import Binding
from textual.message import Message
from textual.widgets import OptionList, Static
from textual.widgets.option_list import Option

from .state import ServerOption


class StatLine(Static):
    """Single labelled value in the status grid."""

    DEFAULT_CSS = """
    StatLine {
        height: 1;
        width: 1fr;
    }

    StatLine.-online {
        color: $success;
    }

    StatLine.-warning {
        color: $warning;
    }

    StatLine.-error {
        color: $error;
    }
    """


class ServerSelector(OptionList):
    """Server picker whose options are rebuilt from each snapshot.

    The active server is listed but disabled. Choosing an enabled option
    posts ``ServerSelector.Changed``; delete or backspace clears the choice.
    """

    DEFAULT_CSS = """
    ServerSelector {
        height: auto;
        max-height: 10;
    }
    """

    BINDINGS = [
        Binding("delete,backspace", "clear_selection", "Clear selection"),
    ]

    class Changed(Message):
        def __init__(self, selector: "ServerSelector", server: Optional[str]) -> None:
            super().__init__()
            self.selector = selector
            self.server = server

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.selected: Optional[str] = None
        self._server_options: Tuple[ServerOption, ...] = ()

    def rebuild(self, options: Sequence[ServerOption], selection: Optional[str]) -> None:
        """Sync options and selection; the cursor only moves when either changes."""
        options = tuple(options)
        if options != self._server_options:
            cursor = self._highlighted_server()
            self._server_options = options
            self.set_options(
                Option(option.label, id=option.value, disabled=option.disabled)
                for option in options
            )
            self.selected = selection
            self.highlighted = self._index_of(selection if selection is not None else cursor)
        elif selection != self.selected:
            self.selected = selection
            self.highlighted = self._index_of(selection)

    def _highlighted_server(self) -> Optional[str]:
        if self.highlighted is None or not 0 <= self.highlighted < len(self._server_options):
            return None
        return self._server_options[self.highlighted].value

    def _index_of(self, server: Optional[str]) -> Optional[int]:
        if server is None:
            return None
        for index, option in enumerate(self._server_options):
            if option.value == server:
                return index
        return None

    def action_clear_selection(self) -> None:
        if self.selected is None:
            return
        self.selected = None
        self.highlighted = None
        self.post_message(self.Changed(self, None))

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        server = event.option.id
        if server == self.selected:
            return
        self.selected = server
        self.post_message(self.Changed(self, server))
