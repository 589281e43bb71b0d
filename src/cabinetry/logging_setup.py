"""Logging configuration for the cabinetry tools.

Provides consistent structured logging setup across the CLI and MCP server.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Dict, List

import structlog


def configure_logging(
    level: str = "INFO",
    enable_colors: bool = True,
    enable_json: bool = False,
    extra_processors: List[Any] | None = None,
    stream: Any = None,
) -> None:
    """Configure structured logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        enable_colors: Enable colored output for console
        enable_json: Use JSON output format
        extra_processors: Additional structlog processors
        stream: Output stream, stdout by default (the MCP server needs stderr)
    """
    stream = stream or sys.stdout
    log_level = LOG_LEVELS[level.upper()]

    logging.basicConfig(format="%(message)s", stream=stream, level=log_level)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="ISO"),
    ]

    if extra_processors:
        processors.extend(extra_processors)

    if enable_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(colors=enable_colors and stream.isatty())
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.WriteLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )


def configure_for(environment: str, **overrides: Any) -> None:
    """Apply one of the preset configurations in :data:`CONFIGS`.

    Raises:
        KeyError: If ``environment`` is not a known preset
    """
    settings = {**CONFIGS[environment], **overrides}
    configure_logging(**settings)


def get_logger(name: str = __name__) -> structlog.BoundLogger:
    """Get a configured logger instance."""
    return structlog.get_logger(name)


LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# level, colors, json per environment
CONFIGS: Dict[str, Dict[str, Any]] = {
    "development": dict(level="DEBUG", enable_colors=True, enable_json=False),
    "production": dict(level="INFO", enable_colors=False, enable_json=True),
    "testing": dict(level="WARNING", enable_colors=False, enable_json=False),
    # MCP stdio server; the caller supplies stream=sys.stderr
    "server": dict(level="INFO", enable_colors=False, enable_json=True),
}
