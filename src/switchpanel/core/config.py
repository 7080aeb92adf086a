"""Configuration management.

Loads and merges configuration from multiple sources with proper precedence.
"""

import json
import os
from contextvars import ContextVar, Token
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from .config_loader import deep_merge, load_json_file
from .config_schema import DEFAULT_BASE_URL, Config, LoggingConfig
from .global_paths import GlobalPath
from ..util.log import Log

log = Log.create({"service": "config"})

__all__ = [
    "Config",
    "ConfigError",
    "ConfigManager",
    "DEFAULT_BASE_URL",
    "LoggingConfig",
]

CONFIG_FILENAME = "switchpanel.json"


class ConfigError(Exception):
    """Configuration error."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Config error in {path}: {message}")


_config_var: ContextVar['ConfigManager'] = ContextVar('_config_var')


class ConfigManager:
    """Configuration management.

    Instance-based with ContextVar for scoping. Class methods delegate
    to the current instance.

    Loads configuration from multiple sources with proper precedence:
    1. Global config (<user config dir>/switchpanel.json)
    2. Project configs (switchpanel.json from filesystem root down to cwd)
    3. SWITCHPANEL_CONFIG_CONTENT environment variable (JSON)
    4. SWITCHPANEL_URL environment variable (base URL only)
    """

    def __init__(self) -> None:
        self._cache: Optional[Config] = None
        self._sources: List[str] = []

    # -- ContextVar plumbing --

    @classmethod
    def current(cls) -> 'ConfigManager':
        try:
            return _config_var.get()
        except LookupError:
            instance = cls()
            _config_var.set(instance)
            return instance

    @classmethod
    def provide(cls, instance: 'ConfigManager') -> Token['ConfigManager']:
        return _config_var.set(instance)

    @classmethod
    def restore(cls, token: Token['ConfigManager']) -> None:
        _config_var.reset(token)

    # -- Public API (class methods delegate to current instance) --

    @classmethod
    def reset(cls) -> None:
        """Reset cached configuration."""
        inst = cls.current()
        inst._cache = None
        inst._sources = []

    @classmethod
    async def load(cls, directory: str = ".") -> Config:
        return await cls.current()._load(directory)

    @classmethod
    async def get(cls) -> Config:
        inst = cls.current()
        if inst._cache is None:
            return await inst._load()
        return inst._cache

    @classmethod
    def sources(cls) -> List[str]:
        return cls.current()._sources.copy()

    # -- Instance methods --

    async def _load(self, directory: str = ".") -> Config:
        if self._cache is not None:
            return self._cache

        result: Dict[str, Any] = {}
        sources: List[str] = []

        # 1. Global config
        global_path = os.path.join(GlobalPath.config(), CONFIG_FILENAME)
        data = load_json_file(global_path)
        if data:
            result = deep_merge(result, data)
            sources.append(global_path)
            log.info("loaded global config", {"path": global_path})

        # 2. Project configs, applied root first so the nearest file wins
        current = Path(directory).resolve()
        project_configs: List[str] = []
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.is_file():
                project_configs.append(str(candidate))
            if current == current.parent:
                break
            current = current.parent

        for filepath in reversed(project_configs):
            if filepath == global_path:
                continue
            data = load_json_file(filepath)
            if data:
                result = deep_merge(result, data)
                sources.append(filepath)
                log.info("loaded project config", {"path": filepath})

        # 3. Inline JSON from the environment
        env_config = os.environ.get("SWITCHPANEL_CONFIG_CONTENT")
        if env_config:
            try:
                data = json.loads(env_config)
            except json.JSONDecodeError:
                log.error("failed to parse SWITCHPANEL_CONFIG_CONTENT")
            else:
                if isinstance(data, dict):
                    result = deep_merge(result, data)
                    sources.append("env:SWITCHPANEL_CONFIG_CONTENT")
                    log.info("loaded config from SWITCHPANEL_CONFIG_CONTENT")

        # 4. Base URL shortcut
        env_url = os.environ.get("SWITCHPANEL_URL")
        if env_url:
            result.pop("baseUrl", None)
            result["base_url"] = env_url
            sources.append("env:SWITCHPANEL_URL")

        try:
            config = Config.model_validate(result)
        except ValidationError as e:
            origin = sources[-1] if sources else "<defaults>"
            raise ConfigError(origin, str(e)) from e

        self._sources = sources
        self._cache = config
        return self._cache
