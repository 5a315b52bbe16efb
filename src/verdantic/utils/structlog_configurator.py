"""Structlog-based logging configuration for the verdantic command line tool.

Library modules log through the standard ``logging`` module. The CLI routes
those records and its own structlog events through one structlog processor
chain, rendered either as JSON lines or as human-readable console output.
"""

import logging
import os
import sys
from collections.abc import Callable
from typing import Any

import structlog

from verdantic.config.models import VerdanticConfig

JSON_LOGS_ENV_VAR = "VERDANTIC_JSON_LOGS"


def _add_static_context(extra_fields: dict[str, str]) -> Callable:
    """Processor to add static context fields to all log entries."""

    def processor(
        logger: structlog.BoundLogger, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict.update(extra_fields)
        return event_dict

    return processor


def _use_json(config: VerdanticConfig) -> bool:
    """Decide between JSON and console rendering."""
    env_value = os.environ.get(JSON_LOGS_ENV_VAR)
    if env_value is not None:
        return env_value.lower() == "true"

    if config.logging.json_logs is not None:
        return config.logging.json_logs

    # Auto-detect: human-readable on a terminal, JSON otherwise
    return not sys.stderr.isatty()


def _shared_processors(config: VerdanticConfig) -> list:
    """Processors applied to both structlog events and stdlib log records."""
    processors = [
        structlog.contextvars.merge_contextvars,
        _add_static_context(dict(config.logging.extra_fields)),
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="ISO"),
    ]

    # Add caller info if requested
    if config.logging.include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder())

    return processors


def _configure_handlers(config: VerdanticConfig, formatter: logging.Formatter) -> None:
    """Replace root handlers with a single stderr handler."""
    root_logger = logging.getLogger()
    log_level = getattr(logging, config.logging.level.upper(), logging.INFO)

    # Clear existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(log_level)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(log_level)
    stderr_handler.setFormatter(formatter)
    root_logger.addHandler(stderr_handler)


def configure_structlog(config: VerdanticConfig) -> None:
    """Configure structlog-based logging system.

    Args:
        config: The VerdanticConfig instance containing logging settings.
    """
    shared = _shared_processors(config)
    use_json = _use_json(config)

    renderer = (
        structlog.processors.JSONRenderer()
        if use_json
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, config.logging.level.upper(), logging.INFO)
        ),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )
    _configure_handlers(config, formatter)

    logger = structlog.get_logger(__name__)
    logger.debug(
        "Structured logging configured",
        log_level=config.logging.level,
        json_output=use_json,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog BoundLogger instance
    """
    return structlog.get_logger(name)
