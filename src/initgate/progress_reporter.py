"""Initgate Progress Reporter.

Tracks each initializer from invocation to settlement and reports
progress through logging and, optionally, a colourised text stream.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
import logging
import time
from typing import Any, TextIO

from initgate.outcome import OutcomeKind

logger = logging.getLogger(__name__)


class TaskStatus(StrEnum):
    """Lifecycle of a single initializer."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class TaskRecord:
    """Individual initializer run."""

    name: str
    kind: OutcomeKind = OutcomeKind.IMMEDIATE
    status: TaskStatus = TaskStatus.PENDING
    message: str = ""
    start_time: float | None = None
    end_time: float | None = None
    error: BaseException | None = None

    @property
    def duration_ms(self) -> float:
        """Get run duration in milliseconds."""
        if self.start_time and self.end_time:
            return (self.end_time - self.start_time) * 1000
        return 0.0

    @property
    def settled(self) -> bool:
        return self.status in {TaskStatus.COMPLETED, TaskStatus.FAILED}

    def start(self) -> None:
        """Mark task as invoked."""
        self.status = TaskStatus.RUNNING
        self.start_time = time.time()

    def complete(self, message: str = "") -> None:
        """Mark task as completed."""
        self.status = TaskStatus.COMPLETED
        self.end_time = time.time()
        if message:
            self.message = message

    def fail(self, message: str, error: BaseException | None = None) -> None:
        """Mark task as failed."""
        self.status = TaskStatus.FAILED
        self.end_time = time.time()
        self.message = message
        self.error = error


class GateProgressReporter:
    """Reports gate progress with clear status messages."""

    def __init__(
        self, output: TextIO | None = None, *, enable_colors: bool = True
    ) -> None:
        """Initialize progress reporter.

        Args:
            output: Stream for human-readable lines; None means log only
            enable_colors: Whether to use colored output on a TTY
        """
        self.output = output
        self.enable_colors = (
            enable_colors
            and output is not None
            and hasattr(output, "isatty")
            and output.isatty()
        )
        self.records: list[TaskRecord] = []
        self.start_time = time.time()
        self.end_time: float | None = None
        self.success: bool | None = None

        self.colors = (
            {
                "reset": "\033[0m",
                "bold": "\033[1m",
                "green": "\033[32m",
                "red": "\033[31m",
                "cyan": "\033[36m",
                "gray": "\033[90m",
            }
            if self.enable_colors
            else dict.fromkeys(["reset", "bold", "green", "red", "cyan", "gray"], "")
        )

    def _colorize(self, text: str, color: str) -> str:
        return f"{self.colors[color]}{text}{self.colors['reset']}"

    def _print(self, message: str) -> None:
        if self.output is not None:
            print(message, file=self.output, flush=True)

    def _get_status_symbol(self, status: TaskStatus) -> str:
        symbols = {
            TaskStatus.PENDING: "⏳",
            TaskStatus.RUNNING: "🔄",
            TaskStatus.COMPLETED: "✅",
            TaskStatus.FAILED: "❌",
        }
        return symbols.get(status, "❓")

    def start_gate(self, app_name: str, task_count: int) -> None:
        """Start reporting a gate run."""
        self.start_time = time.time()
        header = f"{self._colorize('🚀 Initializing', 'bold')} {self._colorize(app_name, 'cyan')}"
        self._print(f"\n{header} ({task_count} initializer(s))")
        self._print(self._colorize("=" * 60, "gray"))
        logger.info("Running %d initializer(s) for %s", task_count, app_name)

    def task_invoked(self, record: TaskRecord) -> None:
        """Report that an initializer has been called."""
        self.records.append(record)
        if record.settled:
            self.task_settled(record)
            return
        symbol = self._get_status_symbol(record.status)
        self._print(f"  {symbol} {record.name}: {self._colorize(record.kind.value, 'gray')}")
        logger.debug("Awaiting %s initializer: %s", record.kind.value, record.name)

    def task_settled(self, record: TaskRecord) -> None:
        """Report that an initializer's result is final."""
        symbol = self._get_status_symbol(record.status)
        if record.status == TaskStatus.FAILED:
            self._print(
                f"  {symbol} {self._colorize(record.name, 'red')}: "
                f"{self._colorize(record.message, 'red')}"
            )
            logger.error(
                "Initializer failed: %s - %s",
                record.name,
                record.message,
                exc_info=record.error,
            )
            return

        display_message = f"  {symbol} {self._colorize(record.name, 'green')}"
        if record.duration_ms > 0:
            display_message += f" {self._colorize(f'({record.duration_ms:.0f}ms)', 'gray')}"
        self._print(display_message)
        logger.info("Completed: %s in %.0fms", record.name, record.duration_ms)

    def report_gate_complete(self, *, success: bool, message: str = "") -> None:
        """Report gate settlement."""
        self.end_time = time.time()
        self.success = success
        total_duration = (self.end_time - self.start_time) * 1000

        if success:
            status_msg = f"✅ {self._colorize('Initialization Complete', 'green')} ({total_duration:.0f}ms)"
            logger.info("Initialization completed in %.0fms", total_duration)
        else:
            status_msg = f"❌ {self._colorize('Initialization Failed', 'red')} ({total_duration:.0f}ms)"
            logger.error(
                "Initialization failed after %.0fms: %s", total_duration, message
            )
        if message:
            status_msg += f": {message}"
        self._print(f"\n{status_msg}")
        self._print(f"{self._colorize('=' * 60, 'gray')}\n")

    def get_summary(self) -> dict[str, Any]:
        """Get a summary of the gate run."""
        total_duration = 0.0
        if self.end_time:
            total_duration = (self.end_time - self.start_time) * 1000

        def count(status: TaskStatus) -> int:
            return sum(1 for r in self.records if r.status == status)

        return {
            "total_duration_ms": total_duration,
            "total_tasks": len(self.records),
            "completed_tasks": count(TaskStatus.COMPLETED),
            "failed_tasks": count(TaskStatus.FAILED),
            "pending_tasks": count(TaskStatus.RUNNING) + count(TaskStatus.PENDING),
            "success": self.success is True,
        }

    def print_summary(self) -> None:
        """Print a detailed summary."""
        summary = self.get_summary()

        self._print(self._colorize("Initialization Summary:", "bold"))
        self._print(f"  Total time: {summary['total_duration_ms']:.0f}ms")
        self._print(f"  Total initializers: {summary['total_tasks']}")
        self._print(f"  ✅ Completed: {summary['completed_tasks']}")
        self._print(f"  ❌ Failed: {summary['failed_tasks']}")
        self._print(f"  ⏳ Pending: {summary['pending_tasks']}")

        if summary["failed_tasks"] > 0:
            self._print(f"\n{self._colorize('Failed Initializers:', 'red')}")
            for record in self.records:
                if record.status == TaskStatus.FAILED:
                    self._print(f"  • {record.name}: {record.message}")
