"""Configuration management with version support."""

import logging
import os
import shutil
from pathlib import Path
from typing import Any

import yaml

from verdantic.config.models import VerdanticConfig
from verdantic.config.versions import CONFIG_ENTITY, CURRENT_VERSION
from verdantic.exceptions import ConfigError
from verdantic.results import Err

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "VERDANTIC_CONFIG"
DEFAULT_CONFIG_FILENAME = "verdantic.yaml"


class ConfigManager:
    """Manages configuration loading, saving, and migration."""

    CURRENT_VERSION = CURRENT_VERSION

    def __init__(self, config_path: Path | str | None = None):
        """Initialize ConfigManager.

        Args:
            config_path: Optional config file path. If None, uses the VERDANTIC_CONFIG
                environment variable, then ./verdantic.yaml.
        """
        if config_path is None:
            config_path = os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_FILENAME
        self.config_path = Path(config_path)

    def load(self) -> VerdanticConfig:
        """Load configuration with migration and validation.

        Returns:
            VerdanticConfig: Loaded and validated configuration. Defaults when the
                config file does not exist.

        Raises:
            ConfigError: If the file is not valid YAML or cannot be migrated
        """
        if not self.config_path.exists():
            logger.debug("No config file at %s, using defaults", self.config_path)
            return VerdanticConfig()

        raw_config = self._read_yaml()

        from_version = CONFIG_ENTITY.version_of(raw_config)
        result = CONFIG_ENTITY.safe_parse(raw_config)
        if isinstance(result, Err):
            raise ConfigError(
                f"Configuration {self.config_path} is invalid: {result.error.describe()}"
            )

        if from_version is not None and from_version != self.CURRENT_VERSION:
            logger.info(
                "Migrated configuration %s from version %s to %s",
                self.config_path,
                from_version,
                self.CURRENT_VERSION,
            )
        return result.value

    def save(self, config: VerdanticConfig) -> None:
        """Save configuration to file with backup.

        Args:
            config: Configuration to save

        Raises:
            PermissionError: If config file cannot be written
        """
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        # Backup existing config
        if self.config_path.exists():
            backup_path = self.config_path.with_suffix(self.config_path.suffix + ".backup")
            try:
                shutil.copy2(self.config_path, backup_path)
            except PermissionError:
                logger.warning("Could not create backup at %s", backup_path)

        config_yaml = yaml.safe_dump(
            config.model_dump(mode="json"), default_flow_style=False, sort_keys=False
        )
        self.config_path.write_text(config_yaml)
        logger.info("Configuration saved successfully to %s", self.config_path)

    def _read_yaml(self) -> dict[str, Any]:
        """Read YAML config file.

        Returns:
            dict: Raw configuration dictionary
        """
        try:
            raw_config = yaml.safe_load(self.config_path.read_text())
        except yaml.YAMLError as e:
            raise ConfigError(f"Configuration {self.config_path} is not valid YAML: {e}") from e

        if raw_config is None:
            return {}
        if not isinstance(raw_config, dict):
            raise ConfigError(f"Configuration {self.config_path} must be a mapping")
        return raw_config
