"""Initgate startup gate.

Runs a fixed list of initializers once and publishes a single completion
future that opens when every asynchronous initializer has succeeded, or
rejects with the first failure.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable
import functools
import logging
from typing import Any

from initgate.exceptions import GateTimeoutError
from initgate.outcome import classify, task_name, to_future
from initgate.progress_reporter import GateProgressReporter, TaskRecord

logger = logging.getLogger(__name__)

Initializer = Callable[[], Any]


class InitGate:
    """One-shot gate over a set of initializers.

    ``run()`` invokes every initializer in order without waiting on any of
    them. Plain return values count as done; awaitables and async iterables
    are awaited jointly. ``finished`` turns True and ``completion`` resolves
    once all of them succeed. The first failure rejects ``completion`` with
    the initializer's own exception and leaves ``finished`` False.
    """

    def __init__(
        self,
        tasks: Iterable[Initializer] | None = None,
        *,
        app_name: str = "application",
        reporter: GateProgressReporter | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        """Initialize the gate.

        Args:
            tasks: Zero-argument initializers, invoked in this order
            app_name: Name used in progress output
            reporter: Progress reporter (creates a log-only one if not provided)
            loop: Event loop for the completion future; defaults to the running loop
        """
        self._tasks: tuple[Initializer, ...] = tuple(tasks) if tasks is not None else ()
        self.app_name = app_name
        self.reporter = reporter or GateProgressReporter()
        self.records: list[TaskRecord] = []

        self._started = False
        self._finished = False
        self._completion: asyncio.Future[None] | None = None

        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                # Built outside the event loop; bound on first use.
                loop = None
        if loop is not None:
            self._completion = loop.create_future()

    def __repr__(self) -> str:
        return (
            f"InitGate(app_name={self.app_name!r}, tasks={len(self._tasks)}, "
            f"started={self._started}, finished={self._finished})"
        )

    @property
    def tasks(self) -> tuple[Initializer, ...]:
        return self._tasks

    @property
    def started(self) -> bool:
        return self._started

    @property
    def finished(self) -> bool:
        """True once every asynchronous initializer has succeeded. Never reset."""
        return self._finished

    @property
    def completion(self) -> asyncio.Future[None]:
        """Future that settles exactly once when the gate opens or fails.

        Safe to request before or after ``run()``; every caller gets the same
        future.
        """
        if self._completion is None:
            self._completion = asyncio.get_running_loop().create_future()
        return self._completion

    def pending_tasks(self) -> list[str]:
        """Names of invoked initializers whose result is not final yet."""
        return [record.name for record in self.records if not record.settled]

    def run(self) -> None:
        """Invoke every initializer once.

        Later calls, including calls made by an initializer while it runs,
        are no-ops. An initializer that raises synchronously aborts the
        remaining invocations and the exception propagates to the caller;
        the gate then never settles, and because it is already marked as
        started a later ``run()`` cannot retry it.

        Raises:
            RuntimeError: If called without a running event loop
        """
        if self._started:
            return

        asyncio.get_running_loop()  # Raises RuntimeError outside the event loop.
        completion = self.completion
        self._started = True
        self.reporter.start_gate(self.app_name, len(self._tasks))

        pending: list[asyncio.Future[Any]] = []
        for task in self._tasks:
            record = TaskRecord(name=task_name(task))
            self.records.append(record)
            record.start()
            try:
                result = task()
            except Exception as e:
                record.fail("Initializer raised during invocation", e)
                self.reporter.task_invoked(record)
                raise

            outcome = classify(result)
            record.kind = outcome.kind
            future = to_future(outcome)
            if future is None:
                record.complete()
            else:
                future.add_done_callback(functools.partial(self._on_task_settled, record))
                pending.append(future)
            self.reporter.task_invoked(record)

        if not pending:
            self._open(completion)
            return

        logger.debug("Waiting on %d asynchronous initializer(s)", len(pending))
        aggregate = asyncio.gather(*pending)
        aggregate.add_done_callback(functools.partial(self._on_all_settled, completion))

    async def wait(self, timeout: float | None = None) -> None:
        """Wait for the gate to open.

        Re-raises the first initializer failure. Timing out neither settles
        nor cancels the gate.

        Raises:
            GateTimeoutError: If the gate is still pending after ``timeout`` seconds
        """
        completion = self.completion
        try:
            await asyncio.wait_for(asyncio.shield(completion), timeout)
        except TimeoutError as e:
            if completion.done():
                raise
            raise GateTimeoutError(timeout or 0.0, self.pending_tasks()) from e

    def _on_task_settled(self, record: TaskRecord, future: asyncio.Future[Any]) -> None:
        if future.cancelled():
            record.fail("Cancelled")
        else:
            error = future.exception()
            if error is not None:
                record.fail(str(error) or type(error).__name__, error)
            else:
                record.complete()
        self.reporter.task_settled(record)

    def _on_all_settled(
        self, completion: asyncio.Future[None], aggregate: asyncio.Future[Any]
    ) -> None:
        if aggregate.cancelled():
            self._cancel(completion)
            return
        error = aggregate.exception()
        if isinstance(error, asyncio.CancelledError):
            self._cancel(completion)
        elif error is not None:
            self._reject(completion, error)
        else:
            self._open(completion)

    def _open(self, completion: asyncio.Future[None]) -> None:
        if completion.done():
            return
        self._finished = True
        completion.set_result(None)
        self.reporter.report_gate_complete(success=True)

    def _reject(self, completion: asyncio.Future[None], error: BaseException) -> None:
        if completion.done():
            return
        completion.set_exception(error)
        self.reporter.report_gate_complete(
            success=False, message=str(error) or type(error).__name__
        )

    def _cancel(self, completion: asyncio.Future[None]) -> None:
        if completion.done():
            return
        completion.cancel()
        self.reporter.report_gate_complete(success=False, message="Cancelled")
