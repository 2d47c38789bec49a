"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (MIMETABLE__REGISTRY__TIMEOUT_SECONDS=30)
  2. mimetable.yaml         (searched in cwd, then ~/.config/mimetable/)
  3. Hardcoded defaults

The config file is optional; all fields have sensible defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_REGISTRY_URL = "https://svn.apache.org/repos/asf/httpd/httpd/trunk/docs/conf/mime.types"


def _find_config_file() -> str | None:
    """Return the path of the first mimetable.yaml found, or None."""
    candidates = [
        Path("mimetable.yaml"),
        Path.home() / ".config" / "mimetable" / "mimetable.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class RegistrySettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    url: str = DEFAULT_REGISTRY_URL
    # The registry is a few tens of kilobytes, but the upstream host is slow.
    timeout_seconds: float = Field(default=600.0, gt=0)


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "text"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: MIMETABLE__LOGGING__LEVEL=DEBUG
        env_prefix="MIMETABLE__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    registry: RegistrySettings = RegistrySettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
