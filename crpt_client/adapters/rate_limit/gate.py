"""Fixed-delay admission gate.

Notes:
- Per-process only: several processes sharing one endpoint each enforce
  their own limit.
- Thread-safe: one lock guards the counter and the lifecycle state.

Release model:
    Every grant schedules its own release ``window_seconds`` after the grant,
    whatever the downstream call does in the meantime. A slow call does not
    hold its slot longer and a fast call does not free it early. At most
    ``request_limit`` slots are outstanding at any instant.

    This is not a sliding log. A released slot is re-granted the moment it
    frees, so a closed interval of exactly ``window_seconds`` can contain
    ``request_limit + 1`` grants: the one at its start and the re-grant at its
    end. Timer latency only ever delays releases, never advances them.
"""

from __future__ import annotations

import logging
import math
import numbers
import threading
import time

from crpt_client.adapters.rate_limit.base import AbstractAdmissionGate, GateState, Grant
from crpt_client.adapters.rate_limit.scheduler import DelayScheduler, ShutdownReport
from crpt_client.core.errors import GateClosedError, InvalidConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CLOSE_GRACE_SECONDS = 5.0


def _validate_limit(request_limit: object) -> int:
    if isinstance(request_limit, bool) or not isinstance(request_limit, int) or request_limit < 1:
        raise InvalidConfigurationError(
            code="invalid_configuration",
            message="request_limit must be a positive integer",
            details={"field": "request_limit", "context": {"value": repr(request_limit)}},
        )
    return request_limit


def _validate_window(window_seconds: object) -> float:
    if (
        isinstance(window_seconds, bool)
        or not isinstance(window_seconds, numbers.Real)
        or not math.isfinite(window_seconds)
        or not window_seconds > 0
    ):
        raise InvalidConfigurationError(
            code="invalid_configuration",
            message="window_seconds must be a positive finite number",
            details={"field": "window_seconds", "context": {"value": repr(window_seconds)}},
        )
    return float(window_seconds)


class FixedDelayAdmissionGate(AbstractAdmissionGate):
    """Blocking gate granting at most ``request_limit`` slots per window.

    Callers block in acquire() until a slot is free; each slot frees itself
    ``window_seconds`` after it was granted. Waiters are not served in FIFO
    order: whichever thread re-checks first after a release wins the slot.

    The gate owns its scheduler and shuts it down on close().
    """

    def __init__(
        self,
        *,
        request_limit: int,
        window_seconds: float,
        scheduler: DelayScheduler | None = None,
        close_grace_seconds: float = DEFAULT_CLOSE_GRACE_SECONDS,
    ) -> None:
        """Initialize the gate.

        Args:
            request_limit: Maximum number of outstanding slots.
            window_seconds: Delay after grant at which a slot is released.
            scheduler: Scheduler running the releases; a private one is created if omitted.
            close_grace_seconds: Default grace period used by close().

        Raises:
            InvalidConfigurationError: If request_limit or window_seconds are not positive.
        """
        self._request_limit = _validate_limit(request_limit)
        self._window_seconds = _validate_window(window_seconds)
        if close_grace_seconds < 0:
            raise InvalidConfigurationError(
                code="invalid_configuration",
                message="close_grace_seconds must be >= 0",
                details={"field": "close_grace_seconds"},
            )
        self._close_grace_seconds = close_grace_seconds

        self._lock = threading.Lock()
        self._slot_freed = threading.Condition(self._lock)
        self._acquired_count = 0
        self._granted_total = 0
        self._state = GateState.OPEN
        self._report: ShutdownReport | None = None
        self._closed = threading.Event()
        self._scheduler = scheduler or DelayScheduler(name="gate-release")

    def __repr__(self) -> str:  # pragma: no cover - representation only
        return (
            f"FixedDelayAdmissionGate(request_limit={self._request_limit}, "
            f"window_seconds={self._window_seconds}, state={self._state.value}, "
            f"acquired={self._acquired_count})"
        )

    @property
    def request_limit(self) -> int:
        return self._request_limit

    @property
    def window_seconds(self) -> float:
        return self._window_seconds

    @property
    def acquired_count(self) -> int:
        with self._lock:
            return self._acquired_count

    @property
    def state(self) -> GateState:
        with self._lock:
            return self._state

    def acquire(self) -> Grant:
        """Block until a slot is granted or the gate closes.

        Returns:
            Grant for the acquired slot.

        Raises:
            GateClosedError: If the gate is closing or closed, including while waiting.
        """
        with self._lock:
            waited = False
            while True:
                if self._state is not GateState.OPEN:
                    raise GateClosedError(
                        code="gate_closed",
                        message="Admission gate is closed",
                        details={"state": self._state.value},
                    )

                if self._acquired_count < self._request_limit:
                    return self._grant_locked(waited=waited)

                if not waited:
                    logger.debug(
                        "gate.waiting",
                        extra={"acquired": self._acquired_count, "limit": self._request_limit},
                    )
                    waited = True
                # Several waiters may wake for one freed slot; the loop re-checks.
                self._slot_freed.wait()

    def _grant_locked(self, *, waited: bool) -> Grant:
        now = time.monotonic()
        # Counter update and scheduling happen under the same lock hold.
        self._scheduler.schedule_once(self._window_seconds, self._release)
        self._acquired_count += 1
        self._granted_total += 1
        grant = Grant(
            sequence=self._granted_total,
            granted_at=now,
            release_at=now + self._window_seconds,
        )
        logger.debug(
            "gate.granted",
            extra={
                "sequence": grant.sequence,
                "acquired": self._acquired_count,
                "limit": self._request_limit,
                "waited": waited,
            },
        )
        return grant

    def _release(self) -> None:
        """Free one slot and wake waiters. Runs on the scheduler thread."""

        with self._lock:
            try:
                if self._acquired_count <= 0:
                    raise RuntimeError("release fired with no outstanding grant")
                self._acquired_count -= 1
                self._slot_freed.notify_all()
            except Exception:
                # The scheduler records the error; the slot may be lost for good.
                logger.error(
                    "gate.release_failed",
                    extra={"acquired": self._acquired_count, "limit": self._request_limit},
                )
                raise
            logger.debug(
                "gate.released",
                extra={"acquired": self._acquired_count, "limit": self._request_limit},
            )

    def close(self, grace_seconds: float | None = None) -> ShutdownReport:
        """Close the gate.

        Blocked and future acquire() calls fail with GateClosedError. Pending
        releases are allowed to fire for up to ``grace_seconds``; whatever is
        left afterwards is cancelled without running.

        Args:
            grace_seconds: Drain period; defaults to the gate's close_grace_seconds.

        Returns:
            ShutdownReport of the first close; later and concurrent calls return it too.
        """
        grace = self._close_grace_seconds if grace_seconds is None else grace_seconds
        if grace < 0:
            raise ValueError("grace_seconds must be >= 0")

        with self._lock:
            owner = self._state is GateState.OPEN
            if owner:
                self._state = GateState.CLOSING
                self._slot_freed.notify_all()
                outstanding = self._acquired_count

        if not owner:
            self._closed.wait()
            return self._report  # type: ignore[return-value]

        logger.info(
            "gate.closing",
            extra={"outstanding": outstanding, "grace_s": grace},
        )

        report: ShutdownReport | None = None
        try:
            report = self._scheduler.shutdown(grace)
        finally:
            if report is None:
                # Shutdown was interrupted; later close() calls get a forced report.
                report = ShutdownReport(
                    forced=True,
                    abandoned=self._scheduler.pending,
                    callback_errors=self._scheduler.callback_errors,
                )
            with self._lock:
                self._state = GateState.CLOSED
                self._report = report
            self._closed.set()

        if report.forced:
            logger.warning(
                "gate.close_forced",
                extra={"abandoned_releases": report.abandoned, "grace_s": grace},
            )
        if report.callback_errors:
            logger.error(
                "gate.closed_with_release_errors",
                extra={"release_errors": len(report.callback_errors)},
            )
        logger.info("gate.closed", extra={"clean": report.clean})
        return report
