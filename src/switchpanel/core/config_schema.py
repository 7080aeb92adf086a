"""Configuration schema: pydantic models for switchpanel config files."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_BASE_URL = "http://127.0.0.1:1081"


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: Optional[str] = None
    format: Optional[Literal["kv", "json", "pretty"]] = None
    console: Optional[bool] = None
    file: Optional[bool] = None
    dev_file: Optional[bool] = Field(None, alias="devFile")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class Config(BaseModel):
    """Main configuration schema."""
    schema_: Optional[str] = Field(None, alias="$schema")
    base_url: str = Field(DEFAULT_BASE_URL, alias="baseUrl")
    poll_interval: int = Field(3, alias="pollInterval", ge=1)
    resync_delay: float = Field(2.0, alias="resyncDelay", ge=0)
    request_timeout: float = Field(10.0, alias="requestTimeout", gt=0)
    log_level: Optional[str] = Field(None, alias="logLevel")
    logging: Optional[LoggingConfig] = None

    model_config = ConfigDict(extra="forbid", populate_by_name=True)
