"""Single-thread delayed callback scheduler.

Each scheduled callback runs exactly once on a dedicated daemon worker
thread, no earlier than its delay. Deadlines are kept in a min-heap guarded
by a condition variable, so the worker sleeps until the earliest deadline or
until new work arrives.

Shutdown is two-phase: the worker first drains due callbacks for up to a
grace period, then every remaining entry is dropped without running.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Callable

from crpt_client.core.errors import SchedulerShutdownError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShutdownReport:
    """Outcome of a scheduler (or gate) shutdown.

    Attributes:
        forced: True when callbacks were still pending after the grace period.
        abandoned: Number of callbacks dropped without running.
        callback_errors: Exceptions raised by callbacks during the scheduler's lifetime.
    """

    forced: bool
    abandoned: int
    callback_errors: tuple[BaseException, ...] = field(default=())

    @property
    def clean(self) -> bool:
        return not self.forced and not self.callback_errors


@dataclass(order=True)
class _Entry:
    deadline: float
    seq: int
    callback: Callable[[], None] = field(compare=False)


class DelayScheduler:
    """Run callbacks once after a fixed delay on a background thread.

    No ordering is guaranteed between callbacks sharing the same deadline
    beyond scheduling order.
    """

    def __init__(
        self,
        *,
        name: str = "delay-scheduler",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._clock = clock
        self._cond = threading.Condition(threading.Lock())
        self._heap: list[_Entry] = []
        self._seq = itertools.count()
        self._accepting = True
        self._cancelled = False
        self._errors: list[BaseException] = []
        self._report: ShutdownReport | None = None
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._thread.start()

    def __repr__(self) -> str:  # pragma: no cover - representation only
        return (
            f"DelayScheduler(name={self._thread.name!r}, pending={self.pending}, "
            f"accepting={self._accepting})"
        )

    @property
    def pending(self) -> int:
        """Number of callbacks scheduled but not yet started."""

        with self._cond:
            return len(self._heap)

    @property
    def is_shutdown(self) -> bool:
        with self._cond:
            return not self._accepting

    @property
    def callback_errors(self) -> tuple[BaseException, ...]:
        with self._cond:
            return tuple(self._errors)

    def schedule_once(self, delay: float, callback: Callable[[], None]) -> None:
        """Arrange for callback to run once, no earlier than delay seconds from now.

        Args:
            delay: Seconds to wait before running the callback.
            callback: Zero-argument callable executed on the worker thread.

        Raises:
            ValueError: If delay is negative or NaN.
            SchedulerShutdownError: If shutdown() was already called.
        """
        if not delay >= 0:
            raise ValueError("delay must be >= 0")

        with self._cond:
            if not self._accepting:
                raise SchedulerShutdownError(
                    code="scheduler_shutdown",
                    message="Cannot schedule work after shutdown",
                )
            heapq.heappush(
                self._heap,
                _Entry(deadline=self._clock() + delay, seq=next(self._seq), callback=callback),
            )
            self._cond.notify()

    def shutdown(self, grace_seconds: float) -> ShutdownReport:
        """Stop accepting work and wait for pending callbacks, then cancel the rest.

        Repeated calls return the report of the first one.

        Args:
            grace_seconds: Maximum time to wait for pending callbacks to run.

        Returns:
            ShutdownReport describing whether pending callbacks had to be dropped.
        """
        if grace_seconds < 0:
            raise ValueError("grace_seconds must be >= 0")

        with self._cond:
            if self._report is not None:
                return self._report
            first = self._accepting
            self._accepting = False
            self._cond.notify_all()

        if not first:
            # Another thread is shutting down; wait for its report.
            with self._cond:
                while self._report is None:
                    self._cond.wait()
                return self._report

        self._thread.join(timeout=grace_seconds)

        with self._cond:
            abandoned = len(self._heap)
            self._heap.clear()
            self._cancelled = True
            self._report = ShutdownReport(
                forced=abandoned > 0,
                abandoned=abandoned,
                callback_errors=tuple(self._errors),
            )
            self._cond.notify_all()
            report = self._report

        if report.forced:
            logger.warning(
                "scheduler.shutdown_forced",
                extra={"scheduler": self._thread.name, "abandoned": abandoned},
            )
        else:
            logger.debug("scheduler.shutdown", extra={"scheduler": self._thread.name})
        return report

    def _next_due(self) -> _Entry | None:
        """Block until an entry is due; None once there is nothing left to run."""

        with self._cond:
            while True:
                if self._cancelled:
                    return None
                if not self._heap:
                    if not self._accepting:
                        return None
                    self._cond.wait()
                    continue
                remaining = self._heap[0].deadline - self._clock()
                if remaining <= 0:
                    return heapq.heappop(self._heap)
                # Condition.wait overflows past TIMEOUT_MAX; the loop re-checks.
                self._cond.wait(timeout=min(remaining, threading.TIMEOUT_MAX))

    def _run(self) -> None:
        while True:
            entry = self._next_due()
            if entry is None:
                return
            try:
                entry.callback()
            except Exception as exc:
                logger.exception(
                    "scheduler.callback_failed",
                    extra={
                        "scheduler": self._thread.name,
                        "error_type": type(exc).__name__,
                    },
                )
                with self._cond:
                    self._errors.append(exc)
