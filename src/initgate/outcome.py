"""Task result classification.

Every initializer returns something. What it returns decides whether the
gate has to wait for it:

- a plain value is complete as soon as the initializer returns
- an awaitable (coroutine, ``asyncio.Future``, ``concurrent.futures.Future``)
  is a single deferred result
- an async iterable is a stream; only its exhaustion or failure matters
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterable, Awaitable
import concurrent.futures
from dataclasses import dataclass
from enum import StrEnum
import inspect
from typing import Any


class OutcomeKind(StrEnum):
    """Shape of an initializer's return value."""

    IMMEDIATE = "immediate"
    DEFERRED = "deferred"
    STREAM = "stream"


@dataclass(frozen=True)
class Immediate:
    """Result that needs no waiting."""

    value: Any = None
    kind: OutcomeKind = OutcomeKind.IMMEDIATE


@dataclass(frozen=True)
class Deferred:
    """Single eventual result."""

    awaitable: Awaitable[Any] | concurrent.futures.Future[Any]
    kind: OutcomeKind = OutcomeKind.DEFERRED


@dataclass(frozen=True)
class DeferredStream:
    """Zero or more items followed by exhaustion or an error."""

    stream: AsyncIterable[Any]
    kind: OutcomeKind = OutcomeKind.STREAM


TaskOutcome = Immediate | Deferred | DeferredStream


def task_name(task: Any) -> str:
    """Readable name for an initializer."""
    name = getattr(task, "__qualname__", None) or getattr(task, "__name__", None)
    return name or repr(task)


def is_future_like(value: Any) -> bool:
    """Check whether a value represents a single eventual result."""
    return inspect.isawaitable(value) or isinstance(value, concurrent.futures.Future)


def is_stream_like(value: Any) -> bool:
    """Check whether a value is an asynchronous stream of items."""
    return isinstance(value, AsyncIterable)


def classify(value: Any) -> TaskOutcome:
    """Map an initializer's raw return value onto a TaskOutcome."""
    if is_future_like(value):
        return Deferred(value)
    if is_stream_like(value):
        return DeferredStream(value)
    return Immediate(value)


async def drain(stream: AsyncIterable[Any]) -> None:
    """Consume a stream until it is exhausted, discarding its items."""
    async for _ in stream:
        pass


def to_future(outcome: TaskOutcome) -> asyncio.Future[Any] | None:
    """Schedule the asynchronous part of an outcome on the running loop.

    Returns None for immediate outcomes. Must be called from the event loop.
    """
    if isinstance(outcome, Deferred):
        if isinstance(outcome.awaitable, concurrent.futures.Future):
            return asyncio.wrap_future(outcome.awaitable)
        return asyncio.ensure_future(outcome.awaitable)
    if isinstance(outcome, DeferredStream):
        return asyncio.ensure_future(drain(outcome.stream))
    return None
