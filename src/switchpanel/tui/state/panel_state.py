"""Mutable panel state owned by the controller."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .snapshot import StatusSnapshot

COUNTDOWN_START = 3


@dataclass
class PanelState:
    """Everything the panel knows between reconciliations.

    The snapshot is only ever replaced through ``apply_snapshot`` and only
    by a fetch issued after the one that produced the current snapshot.
    """

    snapshot: Optional[StatusSnapshot] = None
    selection: Optional[str] = None
    countdown: int = COUNTDOWN_START
    issued_sequence: int = 0
    applied_sequence: int = 0
    last_updated: Optional[datetime] = None

    @property
    def paused(self) -> bool:
        return self.snapshot.auto_switch_paused if self.snapshot is not None else False

    @property
    def current_server(self) -> Optional[str]:
        return self.snapshot.current_server if self.snapshot is not None else None

    def next_sequence(self) -> int:
        self.issued_sequence += 1
        return self.issued_sequence

    def apply_snapshot(self, snapshot: StatusSnapshot, sequence: int) -> bool:
        """Replace the snapshot unless a later-issued fetch already landed."""
        if sequence <= self.applied_sequence:
            return False
        self.snapshot = snapshot
        self.applied_sequence = sequence
        return True
