"""Platform directory paths for Switchpanel.

Configuration and log files live in the per-user directories reported by
platformdirs, created on first import. Setting ``SWITCHPANEL_HOME``
relocates both under a single root.
"""

import os
from pathlib import Path
from typing import Optional

from platformdirs import user_config_dir, user_data_dir

APP_NAME = "switchpanel"


class GlobalPath:
    """Global path management for Switchpanel directories."""

    _initialized = False

    @classmethod
    def home(cls) -> Optional[str]:
        """Root override for all directories, if set."""
        return os.environ.get("SWITCHPANEL_HOME") or None

    @classmethod
    def data(cls) -> str:
        """Application data directory."""
        root = cls.home()
        if root:
            return str(Path(root) / "data")
        return user_data_dir(APP_NAME)

    @classmethod
    def log(cls) -> str:
        """Log file directory."""
        return str(Path(cls.data()) / "log")

    @classmethod
    def config(cls) -> str:
        """Configuration directory."""
        root = cls.home()
        if root:
            return str(Path(root) / "config")
        return user_config_dir(APP_NAME)

    @classmethod
    def initialize(cls) -> None:
        """Create the data, config and log directories."""
        if cls._initialized:
            return

        for path in [cls.data(), cls.config(), cls.log()]:
            Path(path).mkdir(parents=True, exist_ok=True)

        cls._initialized = True


GlobalPath.initialize()
