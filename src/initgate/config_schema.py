"""Initgate Configuration Schema.

Pydantic-based settings for the gate, read from ``INITGATE_*`` environment
variables or a ``.env`` file.
"""

from __future__ import annotations

from enum import StrEnum
import logging
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class LogLevel(StrEnum):
    """Valid log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class GateSettings(BaseSettings):
    """Settings for running the initialization gate."""

    app_name: str = Field(
        default="application",
        description="Application name shown in progress output",
        min_length=1,
    )
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    debug: bool = Field(default=False, description="Use the detailed log format")
    wait_timeout: float | None = Field(
        default=None,
        description="Seconds to wait for the gate to open; unset waits forever",
        gt=0,
        le=3600,
    )
    report_progress: bool = Field(
        default=False, description="Print per-initializer progress to stdout"
    )
    enable_colors: bool = Field(
        default=True, description="Colorize progress output on a TTY"
    )

    model_config = SettingsConfigDict(
        env_prefix="INITGATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def get_summary(self) -> dict[str, Any]:
        return {
            "app_name": self.app_name,
            "log_level": self.log_level.value,
            "wait_timeout": self.wait_timeout,
            "report_progress": self.report_progress,
        }

    @classmethod
    def validate_from_env(cls) -> tuple[GateSettings | None, list[str]]:
        """Validate settings from environment variables.

        Returns:
            Tuple of (settings, errors). Settings is None if validation fails.
        """
        try:
            return cls(), []
        except ValidationError as e:
            errors = []
            for error in e.errors():
                field_path = ".".join(str(loc) for loc in error["loc"])
                errors.append(f"{field_path}: {error['msg']}")
            return None, errors


def load_settings() -> GateSettings:
    """Load and validate settings with clear error reporting."""
    settings, errors = GateSettings.validate_from_env()

    if errors or settings is None:
        logger.error("Settings validation failed:")
        for error in errors:
            logger.error("  • %s", error)
        msg = "Settings validation failed - see logs for details"
        raise ValueError(msg)

    logger.debug("Settings loaded: %s", settings.get_summary())
    return settings
