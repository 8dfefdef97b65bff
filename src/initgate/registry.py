"""Initializer registry.

Ordered multi-provider for startup initializers. Modules register their
initializers here at import time and the bootstrap hands the collected
list to an ``InitGate``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
import logging
from typing import Any, TypeVar

from initgate.outcome import task_name

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[[], Any])


class InitializerRegistry:
    """Collects zero-argument initializers in registration order."""

    def __init__(self, name: str = "initializers") -> None:
        self.name = name
        self._initializers: list[Callable[[], Any]] = []

    def __iter__(self) -> Iterator[Callable[[], Any]]:
        return iter(tuple(self._initializers))

    def __len__(self) -> int:
        return len(self._initializers)

    def __contains__(self, func: object) -> bool:
        return func in self._initializers

    def __repr__(self) -> str:
        return f"InitializerRegistry(name={self.name!r}, size={len(self)})"

    @property
    def names(self) -> list[str]:
        return [task_name(f) for f in self._initializers]

    def register(self, func: F) -> F:
        """Append an initializer. Returns it unchanged, so it works as a decorator."""
        if not callable(func):
            msg = f"Initializer must be callable, got {type(func).__name__}"
            raise TypeError(msg)
        self._initializers.append(func)
        logger.debug(
            "Registered initializer %s in %s", task_name(func), self.name
        )
        return func

    def extend(self, funcs: Iterable[Callable[[], Any]]) -> None:
        for func in funcs:
            self.register(func)

    def clear(self) -> None:
        self._initializers.clear()


APP_INITIALIZERS = InitializerRegistry("app")


def initializer(func: F) -> F:
    """Register ``func`` with the default application registry."""
    return APP_INITIALIZERS.register(func)
