"""Tests for structlog configuration."""

import io
import json
import logging
import sys

import pytest
import structlog

from verdantic.config.models import LoggingConfig, VerdanticConfig
from verdantic.utils.structlog_configurator import (
    _use_json,
    configure_structlog,
    get_logger,
)


@pytest.fixture
def json_config() -> VerdanticConfig:
    return VerdanticConfig(
        logging=LoggingConfig(level="DEBUG", json_logs=True, extra_fields={"service": "tests"})
    )


class TestUseJson:
    """Test JSON output detection."""

    def test_environment_variable_wins(self, monkeypatch, json_config):
        """Should honor VERDANTIC_JSON_LOGS over the config."""
        monkeypatch.setenv("VERDANTIC_JSON_LOGS", "false")

        assert _use_json(json_config) is False

    def test_config_setting(self, monkeypatch):
        """Should use the configured value when set."""
        monkeypatch.delenv("VERDANTIC_JSON_LOGS", raising=False)

        assert _use_json(VerdanticConfig(logging=LoggingConfig(json_logs=False))) is False
        assert _use_json(VerdanticConfig(logging=LoggingConfig(json_logs=True))) is True

    def test_auto_detect(self, monkeypatch):
        """Should render JSON when stderr is not a terminal."""
        monkeypatch.delenv("VERDANTIC_JSON_LOGS", raising=False)
        monkeypatch.setattr(sys, "stderr", io.StringIO())

        assert _use_json(VerdanticConfig()) is True


class TestConfigureStructlog:
    """Test configure_structlog."""

    def test_single_root_handler(self, json_config):
        """Should install one handler on the root logger at the configured level."""
        configure_structlog(json_config)

        root_logger = logging.getLogger()
        assert len(root_logger.handlers) == 1
        assert root_logger.level == logging.DEBUG
        assert isinstance(root_logger.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
        assert structlog.is_configured()

    def test_stdlib_records_rendered_as_json(self, json_config, monkeypatch, capsys):
        """Should render library log records with the static context."""
        monkeypatch.delenv("VERDANTIC_JSON_LOGS", raising=False)
        configure_structlog(json_config)

        logging.getLogger("verdantic.entity").warning("Intermediate version %s missing", 2)

        lines = [line for line in capsys.readouterr().err.splitlines() if line.strip()]
        record = json.loads(lines[-1])
        assert record["event"] == "Intermediate version 2 missing"
        assert record["level"] == "warning"
        assert record["service"] == "tests"
        assert record["logger"] == "verdantic.entity"
        assert "timestamp" in record

    def test_get_logger(self, json_config):
        """Should return a usable structlog logger."""
        configure_structlog(json_config)

        logger = get_logger("tests")
        logger.info("hello", answer=42)
