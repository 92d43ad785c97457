"""Logging initialization driven by ObservabilityConfig.

Modules log through ``logging.getLogger(__name__)`` and pass context via
``extra={...}``. This module installs one handler on the package logger,
either a plain formatter or a JSON-lines formatter that keeps the extra
fields.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, Optional

from .config import ObservabilityConfig, get_config

__all__ = [
    "configure_logging",
    "reset_logging",
    "JsonFormatter",
    "PACKAGE_LOGGER",
]

PACKAGE_LOGGER = "flowpulse"

# Attributes every LogRecord carries; anything else came in through extra.
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_handler: Optional[logging.Handler] = None


class JsonFormatter(logging.Formatter):
    """One JSON object per record, extra fields included."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": self.formatTime(record),
            "logger": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(config: Optional[ObservabilityConfig] = None) -> logging.Logger:
    """Configure the package logger.

    Calling it again replaces the handler installed by the previous
    call instead of adding a second one.

    Args:
        config: Logging settings; defaults to the application config.

    Returns:
        The configured package logger.
    """
    global _handler

    config = config or get_config().observability
    logger = logging.getLogger(PACKAGE_LOGGER)

    if _handler is not None:
        logger.removeHandler(_handler)

    handler = logging.StreamHandler(sys.stderr)
    if config.structured:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(config.format))

    logger.addHandler(handler)
    logger.setLevel(config.level.upper())
    logger.propagate = False

    _handler = handler
    return logger


def reset_logging() -> None:
    """Remove the installed handler. Mainly for testing purposes."""
    global _handler
    logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is not None:
        logger.removeHandler(_handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    _handler = None
