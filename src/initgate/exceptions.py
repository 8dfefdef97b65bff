"""Initgate exception hierarchy.

Task failures are never wrapped by these types: the completion future
rejects with the exact exception a task raised. These cover errors that
belong to the gate itself.
"""

from __future__ import annotations

from typing import Any


class InitGateError(Exception):
    """Gate-specific error with detailed context."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details = details or {}


class GateTimeoutError(InitGateError):
    """Raised when waiting for the gate to open takes longer than allowed."""

    def __init__(self, timeout: float, pending: list[str]) -> None:
        names = ", ".join(pending) if pending else "none"
        super().__init__(
            f"Initialization did not complete within {timeout}s (pending: {names})",
            details={"timeout": timeout, "pending": pending},
        )
        self.timeout = timeout
        self.pending = pending
