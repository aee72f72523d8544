"""Admission gate interfaces.

The document client depends on this abstraction (not the concrete
implementation) so the release model can be swapped without touching the
submission path.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from crpt_client.adapters.rate_limit.scheduler import ShutdownReport


class GateState(str, Enum):
    """Lifecycle of a gate. Transitions only move forward."""

    OPEN = "open"
    CLOSING = "closing"
    CLOSED = "closed"


@dataclass(frozen=True)
class Grant:
    """A slot handed out by acquire().

    Attributes:
        sequence: 1-based number of the grant within the gate's lifetime.
        granted_at: Monotonic time when the slot was granted.
        release_at: Monotonic time when the slot is due to be released.
    """

    sequence: int
    granted_at: float
    release_at: float


class AbstractAdmissionGate(ABC):
    """Interface for blocking admission gates."""

    @abstractmethod
    def acquire(self) -> Grant:
        """Block until a slot is granted.

        Returns:
            Grant describing the slot. Release is automatic.

        Raises:
            GateClosedError: If the gate is closing or closed.
        """
        raise NotImplementedError

    @abstractmethod
    def close(self, grace_seconds: float | None = None) -> ShutdownReport:
        """Reject further acquires and shut down pending releases.

        Args:
            grace_seconds: How long to wait for pending releases before cancelling them.

        Returns:
            ShutdownReport; repeated calls return the same report.
        """
        raise NotImplementedError

    def __enter__(self) -> "AbstractAdmissionGate":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
