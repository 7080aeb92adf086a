"""Status snapshot models decoded from ``GET /api/status``."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StatusSnapshot(BaseModel):
    """One complete status payload from the backend.

    Snapshots are immutable and always replaced wholesale.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    current_server: Optional[str] = None
    error_count: int = Field(0, ge=0)
    uptime: Optional[str] = None
    auto_switch_paused: bool = False
    goroutine_count: Optional[int] = None
    memory_usage_mb: Optional[float] = None
    memory_alloc_mb: Optional[float] = None
    naive_version: Optional[str] = None
    switcher_version: Optional[str] = None
    down_stats: Dict[str, int] = Field(default_factory=dict)
    available_servers: List[str] = Field(default_factory=list)
    start_time: Optional[int] = None

    @field_validator("error_count", mode="before")
    @classmethod
    def _null_error_count(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("auto_switch_paused", mode="before")
    @classmethod
    def _null_paused(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("down_stats", mode="before")
    @classmethod
    def _null_down_stats(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("available_servers", mode="before")
    @classmethod
    def _null_servers(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("current_server", "uptime", "naive_version", "switcher_version", mode="before")
    @classmethod
    def _blank_text(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("memory_usage_mb", "memory_alloc_mb", mode="before")
    @classmethod
    def _blank_number(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class StatusEnvelope(BaseModel):
    """Response envelope: ``{"success": bool, "data"?: StatusSnapshot}``."""

    model_config = ConfigDict(extra="ignore")

    success: bool = False
    data: Optional[StatusSnapshot] = None
    error: Optional[str] = None
