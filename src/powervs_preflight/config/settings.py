"""
User settings.

Stored at ~/.powervs-preflight/config.toml. Environment variables take
precedence over the file.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import tomli

from powervs_preflight.errors import PreflightError

SETTINGS_PATH = Path.home() / ".powervs-preflight" / "config.toml"

INVENTORY_ENV = "POWERVS_PREFLIGHT_INVENTORY"
LOG_LEVEL_ENV = "POWERVS_PREFLIGHT_LOG_LEVEL"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class Settings:
    """Defaults for the command line."""
    inventory_path: Optional[Path] = None
    log_level: str = "INFO"

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        """
        Load settings from file and environment.

        Args:
            path: Settings file (default: ~/.powervs-preflight/config.toml)

        Returns:
            Settings, with defaults for anything not configured
        """
        if path is None:
            path = SETTINGS_PATH

        data = {}
        if path.exists():
            try:
                with open(path, "rb") as f:
                    data = tomli.load(f)
            except tomli.TOMLDecodeError as e:
                raise PreflightError(f"Invalid settings file {path}: {e}") from e

        inventory = os.environ.get(INVENTORY_ENV) or data.get("inventory")
        log_level = (os.environ.get(LOG_LEVEL_ENV) or data.get("log_level", "INFO")).upper()
        if log_level not in LOG_LEVELS:
            raise PreflightError(f"Unknown log level {log_level!r}, expected one of {', '.join(LOG_LEVELS)}")

        return cls(
            inventory_path=Path(inventory).expanduser() if inventory else None,
            log_level=log_level,
        )
