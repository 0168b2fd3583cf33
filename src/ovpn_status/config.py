"""Configuration model for ovpn_status.

Settings are defined with Pydantic's ``BaseSettings`` and can be loaded from
keyword arguments, environment variables (prefix ``OVPN_STATUS_``), a
``.env`` file, or a YAML file, in that order of precedence.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Type

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from .constants import CONFIG_FILE_NAME, DEFAULT_ENCODING, DEFAULT_STATUS_FILE
from .core.file_utils import find_project_root
from .exceptions import ConfigError

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """
    A Pydantic settings source that loads variables from a YAML file.
    """

    def __init__(self, settings_cls: Type[BaseSettings], yaml_file: Path | None):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._data: dict[str, Any] = {}
        if self.yaml_file and self.yaml_file.exists():
            try:
                loaded = yaml.safe_load(self.yaml_file.read_text())
            except (yaml.YAMLError, IOError) as exc:
                logging.warning("Ignoring unreadable config file %s: %s", self.yaml_file, exc)
                loaded = None
            self._data = loaded if isinstance(loaded, dict) else {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str] | None:
        if not self._data:
            return None
        return (self._data.get(field_name), field_name)

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


class Settings(BaseSettings):
    """Settings for reading OpenVPN status files."""

    status_file: Path = Field(
        DEFAULT_STATUS_FILE,
        description="Status file read by parse_file when no path is given.",
    )
    encoding: str = Field(DEFAULT_ENCODING, description="Text encoding of the status file.")
    log_level: str = Field("INFO", description="Root log level used by setup_logging.")

    config_file: Optional[Path] = Field(default=None, exclude=True)

    model_config = SettingsConfigDict(env_prefix="OVPN_STATUS_", case_sensitive=False)

    @field_validator("log_level", mode="before")
    @classmethod
    def _check_log_level(cls, value: Any) -> str:
        """Accept any case, store the canonical upper-case level name."""
        level = str(value).strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        config_file = init_settings.init_kwargs.get("config_file")
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=config_file),
            file_secret_settings,
        )


def load_config(path: Path | None = None) -> Settings:
    """
    Load settings from a YAML file and environment variables.

    Without an explicit ``path``, ``ovpn_status.yaml`` at the project root
    (searched upwards from the working directory) is used if it exists.

    Raises:
        ConfigError: If the resulting settings fail validation.
    """
    config_file = path
    if config_file is None:
        try:
            project_root = find_project_root()
            default_config_path = project_root / CONFIG_FILE_NAME
            if default_config_path.exists():
                config_file = default_config_path
        except FileNotFoundError:
            logging.warning(
                "Could not find project root marker 'pyproject.toml'. "
                "Default '%s' will not be loaded.",
                CONFIG_FILE_NAME,
            )
    try:
        return Settings(config_file=config_file)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
