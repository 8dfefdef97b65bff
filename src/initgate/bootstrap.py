"""Initgate bootstrap.

Builds a gate from the registered initializers, runs it and holds the
caller until the application is ready.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
import logging
import sys
from typing import Any

from initgate.config_schema import GateSettings, load_settings
from initgate.gate import InitGate
from initgate.logging_config import setup_logging
from initgate.progress_reporter import GateProgressReporter
from initgate.registry import APP_INITIALIZERS

logger = logging.getLogger(__name__)


def create_reporter(settings: GateSettings) -> GateProgressReporter:
    """Build the progress reporter the settings ask for."""
    output = sys.stdout if settings.report_progress else None
    return GateProgressReporter(output, enable_colors=settings.enable_colors)


async def bootstrap(
    initializers: Iterable[Callable[[], Any]] | None = None,
    *,
    settings: GateSettings | None = None,
    reporter: GateProgressReporter | None = None,
) -> InitGate:
    """Run initializers and wait until the gate opens.

    Args:
        initializers: Initializers to run (defaults to ``APP_INITIALIZERS``)
        settings: Gate settings (loaded and validated from the environment if
            not provided)
        reporter: Progress reporter (built from settings if not provided)

    Returns:
        The opened gate.

    Raises:
        ValueError: If settings loaded from the environment are invalid
        GateTimeoutError: If the gate is still pending after ``settings.wait_timeout``
        Exception: Whatever the first failing initializer raised
    """
    settings = settings or load_settings()
    setup_logging(settings)
    gate = InitGate(
        APP_INITIALIZERS if initializers is None else initializers,
        app_name=settings.app_name,
        reporter=reporter or create_reporter(settings),
    )

    try:
        gate.run()
        await gate.wait(settings.wait_timeout)
    except Exception:
        logger.exception("Initialization of %s failed", settings.app_name)
        raise

    if settings.report_progress:
        gate.reporter.print_summary()
    return gate
