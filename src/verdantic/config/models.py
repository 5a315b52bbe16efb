"""Configuration models for the verdantic command line tool.

This module contains the pydantic models describing the current config file layout.
"""

import logging
from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class OutputFormat(StrEnum):
    """Serialization formats for migrated documents."""

    YAML = "yaml"
    JSON = "json"


def normalize_log_level(level: str) -> str:
    """Upper-case a log level name, rejecting unknown levels."""
    normalized = level.upper()
    if normalized not in logging.getLevelNamesMapping():
        raise ValueError(f"Unknown log level '{level}'")
    return normalized


class LoggingConfig(BaseModel):
    """Structlog-based logging configuration."""

    level: str = "INFO"
    json_logs: bool | None = None  # None = auto-detect based on whether stderr is a TTY
    include_caller: bool = False  # Include file:line info (useful for debugging)
    extra_fields: dict[str, str] = Field(default_factory=lambda: {"service": "verdantic"})

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate the log level name."""
        return normalize_log_level(v)


class VerdanticConfig(BaseModel):
    """Configuration settings for the verdantic tool."""

    config_version: Literal[2] = 2  # Configuration schema version

    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # Output of the migrate command
    output_format: OutputFormat = OutputFormat.YAML
    indent: int = Field(default=2, ge=0, le=8)
