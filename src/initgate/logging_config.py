"""Initgate logging configuration."""

from __future__ import annotations

import logging
import logging.config
import sys
from typing import Any

from initgate.config_schema import GateSettings

logger = logging.getLogger(__name__)


def build_logging_config(settings: GateSettings) -> dict[str, Any]:
    level = settings.log_level.value
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "detailed": {
                "format": (
                    "%(asctime)s | %(name)s | %(levelname)s | "
                    "%(filename)s:%(lineno)d | %(funcName)s | %(message)s"
                ),
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "simple": {
                "format": "%(asctime)s | %(levelname)s | %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "detailed" if settings.debug else "simple",
                "stream": sys.stderr,
            },
        },
        "loggers": {
            "initgate": {
                "level": level,
                "handlers": ["console"],
                "propagate": True,
            },
        },
    }


def setup_logging(settings: GateSettings | None = None) -> None:
    """Configure the ``initgate`` logger from settings."""
    settings = settings or GateSettings()
    logging.config.dictConfig(build_logging_config(settings))
    logger.debug("Logging configured at %s", settings.log_level.value)
