"""Logging configuration for updater-additions.

Logs go to stderr so that JSON printed by the CLI on stdout stays
machine-readable. ``LOG_LEVEL`` picks the level and ``LOG_FORMAT=json``
switches to one JSON object per line.
"""

import json
import logging
import os
import sys
from datetime import datetime
from typing import Any, Dict

LOGGER_NAME = "updater_additions"

# Attributes passed through ``extra=`` that StructuredFormatter emits
CONTEXT_FIELDS = ("slug", "addition_type", "addition_id", "settings_file")


def resolve_level(level: str) -> int:
    """Map a level name such as "debug" to its logging constant, INFO if unknown."""
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: str = "INFO", structured: bool = False) -> logging.Logger:
    """
    Configure the package logger.

    Calling it again returns the already configured logger unchanged.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR)
        structured: Emit JSON lines instead of human-readable text

    Returns:
        The "updater_additions" logger
    """
    package_logger = logging.getLogger(LOGGER_NAME)
    if package_logger.handlers:
        return package_logger

    handler = logging.StreamHandler(sys.stderr)
    if structured:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    package_logger.addHandler(handler)
    package_logger.setLevel(resolve_level(level))
    return package_logger


def set_log_level(level: str) -> None:
    """Change the level of the package logger, e.g. for --verbose."""
    logger.setLevel(resolve_level(level))


class StructuredFormatter(logging.Formatter):
    """Formats records as JSON, including addition context passed via ``extra``."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False)


logger = setup_logging(
    level=os.getenv("LOG_LEVEL", "INFO"),
    structured=os.getenv("LOG_FORMAT", "").lower() == "json",
)
