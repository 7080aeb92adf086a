from __future__ import annotations

from typing import Any, Literal, TypedDict

JSONDict = dict[str, Any]

AutoSwitchAction = Literal["pause", "resume"]


class _AvoidSwitchRequired(TypedDict):
    type: Literal["avoid"]


class AvoidSwitchPayload(_AvoidSwitchRequired, total=False):
    avoid_server: str


class SelectSwitchPayload(TypedDict):
    type: Literal["select"]
    target_server: str


SwitchPayload = AvoidSwitchPayload | SelectSwitchPayload


class AutoSwitchPayload(TypedDict):
    action: AutoSwitchAction


class StatusEnvelopePayload(TypedDict, total=False):
    success: bool
    data: JSONDict
    error: str
