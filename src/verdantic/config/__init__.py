"""verdantic tool configuration package.

This package provides configuration management for the command line tool with:
- Version tracking and migration support (the config file is a versioned entity)
- Pydantic validation of each config version
- YAML parsing and serialization
"""

from .manager import ConfigManager
from .models import LoggingConfig, OutputFormat, VerdanticConfig

__all__ = [
    "ConfigManager",
    "LoggingConfig",
    "OutputFormat",
    "VerdanticConfig",
]
