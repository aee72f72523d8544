"""Application-level exception types.

This module defines the errors raised by the admission gate, the delay
scheduler and the submitter, enabling consistent error handling and logging
for callers of the document client.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and callers.

    Fields are optional so each error only carries what it knows.
    """

    code: str
    message: str
    hint: str
    field: str
    http_status: int
    response_body: str
    url: str
    state: str
    submission_id: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for client failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class InvalidConfigurationError(AppError):
    """Raised when a gate or submitter is constructed with invalid settings."""


class GateClosedError(AppError):
    """Raised by acquire() once the gate is closing or closed."""


class SchedulerShutdownError(AppError):
    """Raised when work is scheduled on a scheduler that was shut down."""


class TransportError(AppError):
    """Raised when the registration endpoint could not be reached."""


class ProtocolError(AppError):
    """Raised when the registration endpoint answers with a non-success status."""
