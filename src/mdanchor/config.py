"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (MDANCHOR__TOC__SLUGIFY_MODE=gitlab)
  2. mdanchor.yaml          (searched in cwd, then platform config dir)
  3. Hardcoded defaults

The config file is optional; all fields have defaults.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_DEFAULT_CONFIG_DIR = platformdirs.user_config_dir("mdanchor")


def _find_config_file() -> str | None:
    """Return the path of the first mdanchor.yaml found, or None."""
    candidates = [
        Path("mdanchor.yaml"),
        Path(_DEFAULT_CONFIG_DIR) / "mdanchor.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class TocSettings(BaseModel):
    # Unknown modes fall back to github when slugifying.
    slugify_mode: str = "github"
    downcase_link: bool = True
    plaintext_mode: Literal["legacy", "commonMark"] = "legacy"


class RendererSettings(BaseModel):
    cache_size: int = Field(default=256, ge=0)  # 0 disables memoisation


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: MDANCHOR__TOC__DOWNCASE_LINK=false
        env_prefix="MDANCHOR__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    toc: TocSettings = TocSettings()
    renderer: RendererSettings = RendererSettings()
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
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings used when callers do not pass options explicitly."""
    return Settings()
