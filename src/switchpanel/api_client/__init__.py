"""Typed API client for the switcher's HTTP control endpoints."""

from .client import ApiClientError, CommandResult, SwitcherAPIClient

__all__ = ["ApiClientError", "CommandResult", "SwitcherAPIClient"]
