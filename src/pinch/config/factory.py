# region Docstring
"""
pinch.config.factory
Factory module for creating settings objects with multi-source configuration support.
Overview:
- Provides a custom Pydantic BaseSettings subclass that loads values from environment
    variables, a .env file and the per-user config.yaml.
- Implements a cached factory function so settings are only read once per process.
Contents:
- Constants:
    - T: TypeVar bound to BaseSettings for generic typing support in the factory function.
- Classes:
    - FactoryBaseSettings:
        Custom BaseSettings subclass adding YAML support.
        Configuration Priority (highest to lowest):
            1. Environment variables
            2. .env file values
            3. config.yaml in the pinch configuration directory
            4. Init kwargs
            5. Field defaults
- Functions:
    - get_settings(settings_cls: Type[T]) -> T:
        LRU-cached factory function that instantiates and returns settings objects.
Design notes:
- The YAML location is resolved when the settings object is built, not when this
    module is imported, so PINCH_HOME may change between processes or tests.
- get_settings.cache_clear() resets the cache (used by the test suite).
"""

# region Imports
from functools import lru_cache
from typing import Type, TypeVar

from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from .base import AppEnv

# endregion
# region FactoryBaseSettings Class
T = TypeVar("T", bound=BaseSettings)


class FactoryBaseSettings(BaseSettings):
    """
    Custom BaseSettings that supports YAML and Env Vars.
    Priority: Env Vars > .env > YAML > Init kwargs > Defaults
    """

    model_config = SettingsConfigDict(
        env_file=AppEnv.ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:

        yaml_settings = YamlConfigSettingsSource(
            settings_cls,
            yaml_file=AppEnv.yaml_files(),
        )
        return (
            env_settings,  # Environment variables (highest priority)
            dotenv_settings,  # .env file
            yaml_settings,  # config.yaml
            init_settings,  # Init kwargs
        )


# endregion
# region get_settings Factory Function


@lru_cache
def get_settings(settings_cls: Type[T]) -> T:
    """
    Factory function to load any settings class.
    Results are cached so we don't re-read files every time.
    """
    return settings_cls()


# endregion
