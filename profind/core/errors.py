"""Application-level exception types.

Domain errors shared by services and routes so that error handling, logging
and API responses stay consistent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients."""

    code: str
    message: str
    hint: str
    field: str
    min_value: int
    max_value: int
    actual_value: int
    http_status: int
    retry_after: int
    reset_at: int
    action: str
    request_id: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

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


class ValidationAppError(AppError):
    """Raised when request input fails validation."""


class AuthorizationAppError(AppError):
    """Raised when the caller is not allowed to perform an action."""


class RateLimitAppError(AppError):
    """Raised when a caller exceeds the rate limit for an action."""
