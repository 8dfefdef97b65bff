"""Initgate.

Startup gate that runs registered initializers and publishes a single
readiness signal once all of them have completed.
"""

from __future__ import annotations

from initgate.bootstrap import bootstrap
from initgate.config_schema import GateSettings, load_settings
from initgate.exceptions import GateTimeoutError, InitGateError
from initgate.gate import InitGate
from initgate.logging_config import setup_logging
from initgate.outcome import (
    Deferred,
    DeferredStream,
    Immediate,
    OutcomeKind,
    TaskOutcome,
    classify,
    is_future_like,
    is_stream_like,
    task_name,
)
from initgate.progress_reporter import GateProgressReporter, TaskRecord, TaskStatus
from initgate.registry import APP_INITIALIZERS, InitializerRegistry, initializer

__all__ = [
    "APP_INITIALIZERS",
    "Deferred",
    "DeferredStream",
    "GateProgressReporter",
    "GateSettings",
    "GateTimeoutError",
    "Immediate",
    "InitGate",
    "InitGateError",
    "InitializerRegistry",
    "OutcomeKind",
    "TaskOutcome",
    "TaskRecord",
    "TaskStatus",
    "bootstrap",
    "classify",
    "initializer",
    "is_future_like",
    "is_stream_like",
    "load_settings",
    "setup_logging",
    "task_name",
]
