"""Configuration version 1: flat logging settings."""

from typing import Literal

from pydantic import BaseModel, field_validator

from verdantic.config.models import OutputFormat, normalize_log_level
from verdantic.versions import initial_version


class ConfigFileV1(BaseModel):
    """Version 1 config file layout."""

    config_version: Literal[1] = 1
    log_level: str = "INFO"
    json_logs: bool | None = None
    output_format: OutputFormat = OutputFormat.YAML

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate the log level name."""
        return normalize_log_level(v)


VERSION = initial_version(ConfigFileV1)
