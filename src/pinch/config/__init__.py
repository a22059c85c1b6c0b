"""
pinch.config
Configuration and settings management for pinch.
Overview:
- Provides the Pydantic-based settings class for the CLI, the history store and the
    clipboard watcher.
- PinchSettings inherits from FactoryBaseSettings and supports environment variable
    overrides via Field aliases.
Contents:
- Settings Classes:
    - PinchSettings:
        Location of the history file, default capacity for a fresh history, clipboard
        poll interval, default list length and log level.
- Re-exports:
    - AppEnv: directory resolution helpers.
    - FactoryBaseSettings: base settings class with YAML support.
    - get_settings: cached factory for settings instances.
Design Notes:
- All fields carry an alias (PINCH_*) so they can be set from the environment,
    a .env file, or config.yaml in the configuration directory.
- default_max_items only seeds a brand new history file. Once the file exists its
    own maxItems value wins; `pinch config --max` changes it.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator

from pinch.config.base import AppEnv
from pinch.config.factory import FactoryBaseSettings
from pinch.config.factory import get_settings  # noqa: F401  This is used externally


class PinchSettings(FactoryBaseSettings):
    """
    pinch configuration settings.
    """

    home: Optional[Path] = Field(
        default=None,
        alias="PINCH_HOME",
        description="Directory for the history file and logs. [Default: OS config dir]",
    )
    history_file: str = Field(
        default="history.json",
        alias="PINCH_HISTORY_FILE",
        description="File name of the persisted history inside the config directory.",
    )
    default_max_items: int = Field(
        default=100,
        alias="PINCH_MAX_ITEMS",
        description="Capacity of a newly created history. [Default: 100]",
    )
    poll_interval: float = Field(
        default=0.5,
        alias="PINCH_POLL_INTERVAL",
        description="Interval for polling the clipboard. (Seconds) [Default: 0.5]",
    )
    list_limit: int = Field(
        default=10,
        alias="PINCH_LIST_LIMIT",
        description="Number of clips shown by `pinch list`. [Default: 10]",
    )
    log_level: str = Field(
        default="info",
        alias="PINCH_LOG_LEVEL",
        description="Log level for the pinch log file.",
    )

    @field_validator("default_max_items", "list_limit")
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be a positive integer")
        return v

    @field_validator("poll_interval")
    def validate_interval(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("poll interval must be greater than zero")
        return v

    @property
    def config_dir(self) -> Path:
        """Directory holding the history file, config.yaml and logs."""
        if self.home is not None:
            return self.home.expanduser().resolve()
        return AppEnv.config_dir()

    @property
    def history_path(self) -> Path:
        """Full path of the persisted history file."""
        return self.config_dir / self.history_file

    @property
    def logs_dir(self) -> Path:
        """Base directory for logs."""
        return self.config_dir / "logs"


__all__ = [
    "AppEnv",
    "FactoryBaseSettings",
    "PinchSettings",
    "get_settings",
]
