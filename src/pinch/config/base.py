# region Docstring
"""
pinch.config.base

Directory resolution for pinch's configuration and persisted state.

Overview:
- Provides a utility class for resolving where pinch keeps its history file,
    its optional YAML configuration and its log files.
- The directory follows the host OS convention (via platformdirs) unless
    PINCH_HOME points somewhere else, either in the environment or in .env.

Contents:
- Classes:
    - AppEnv:
        Class methods to resolve the configuration directory and the YAML config
        file candidates.

Resolution Logic:
- Priority 1: PINCH_HOME environment variable.
- Priority 2: PINCH_HOME in the .env file of the working directory, the same file
    the settings read, so config.yaml and the history file agree.
- Priority 3: platformdirs.user_config_dir("pinch").

Design Notes:
- Resolution happens on every call instead of at import time, so a process
    (or a test) that changes PINCH_HOME sees the new location immediately.
"""
# endregion
# region Imports
import os
from pathlib import Path

from dotenv import dotenv_values
from platformdirs import user_config_dir

# endregion
# region AppEnv Class


class AppEnv:
    """
    Application directory resolution utility.

    Attributes:
        APP_NAME (str): Name used for the per-user configuration directory.
        HOME_VAR (str): Variable that overrides the directory.
        ENV_FILE (str): Dotenv file consulted when HOME_VAR is not in the environment.
    """

    APP_NAME: str = "pinch"
    HOME_VAR: str = "PINCH_HOME"
    ENV_FILE: str = ".env"

    @classmethod
    def config_dir(cls) -> Path:
        """Get the directory holding the history file and config.yaml."""
        override = os.getenv(cls.HOME_VAR)
        if not override:
            override = dotenv_values(cls.ENV_FILE, encoding="utf-8").get(cls.HOME_VAR)
        if override:
            return Path(override).expanduser().resolve()
        return Path(user_config_dir(cls.APP_NAME)).resolve()

    @classmethod
    def yaml_files(cls) -> list[Path]:
        """Get the YAML configuration files, lowest priority last."""
        return [cls.config_dir() / "config.yaml"]


# endregion

__all__ = ["AppEnv"]
