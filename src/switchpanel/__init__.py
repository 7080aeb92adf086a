"""Switchpanel - terminal control panel for a failover-switching proxy.

Polls the switcher's status endpoint, renders health, version and usage
metrics, and dispatches administrative commands (force switch, pause or
resume auto switching, update checks, log viewing).
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
