"""Terminal control panel for the switcher backend."""

from .app import PanelApp, create_panel_app, run_panel, run_panel_async
from .controller import PanelController

__all__ = [
    "PanelApp",
    "PanelController",
    "create_panel_app",
    "run_panel",
    "run_panel_async",
]
