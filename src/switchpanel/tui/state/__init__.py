"""Panel state, snapshot models and view selectors."""

from .panel_state import COUNTDOWN_START, PanelState
from .panel_view import ButtonState, PanelView, ServerOption, StatusTier
from .selectors import select_panel_view, status_tier
from .snapshot import StatusEnvelope, StatusSnapshot
from .subscription import ScreenSubscriptions

__all__ = [
    "COUNTDOWN_START",
    "ButtonState",
    "PanelState",
    "PanelView",
    "ScreenSubscriptions",
    "ServerOption",
    "StatusEnvelope",
    "StatusSnapshot",
    "StatusTier",
    "select_panel_view",
    "status_tier",
]
