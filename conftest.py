"""Global pytest configuration for logging setup.

Keeps caplog able to capture records from every initgate logger, even
after a test has applied ``setup_logging``.
"""

import logging

import pytest

LOGGERS = [
    "initgate",
    "initgate.bootstrap",
    "initgate.config_schema",
    "initgate.gate",
    "initgate.progress_reporter",
    "initgate.registry",
]


@pytest.fixture(autouse=True)
def setup_logging() -> None:
    """Ensure consistent logging configuration across all tests."""
    for logger_name in LOGGERS:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.DEBUG)
        # Propagation lets caplog see the records
        logger.propagate = True

    logging.getLogger().setLevel(logging.DEBUG)


@pytest.fixture(autouse=True)
def configure_caplog(caplog: pytest.LogCaptureFixture) -> None:
    """Capture DEBUG records from all initgate modules."""
    caplog.set_level(logging.DEBUG)
    for logger_name in LOGGERS:
        caplog.set_level(logging.DEBUG, logger=logger_name)
