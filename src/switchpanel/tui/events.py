"""Panel event definitions.

Published on the controller's bus; the controller's subscription table
routes them to the syncer and reconciler.
"""

from typing import Optional

from pydantic import BaseModel, Field

from ..core.bus import BusEvent


class StatusSyncedProps(BaseModel):
    """A snapshot from fetch ``sequence`` was applied."""
    sequence: int


class ResyncRequestedProps(BaseModel):
    """Ask for a fresh status fetch, optionally after ``delay`` seconds."""
    delay: float = Field(0.0, ge=0)
    reason: Optional[str] = None


class SelectionChangedProps(BaseModel):
    server: Optional[str] = None


class PanelEvent:
    """Panel event definitions."""

    StatusSynced = BusEvent.define("panel.status.synced", StatusSyncedProps)

    ResyncRequested = BusEvent.define("panel.resync.requested", ResyncRequestedProps)

    SelectionChanged = BusEvent.define("panel.selection.changed", SelectionChangedProps)
