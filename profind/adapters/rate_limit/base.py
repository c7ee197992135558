"""Rate limiter interfaces.

The HTTP layer depends on this abstraction (not the concrete implementation)
so the bucket storage can be swapped later (e.g., Redis) with minimal
changes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitPolicy:
    """Limits applied to one kind of action.

    Attributes:
        window_ms: Length of the window, measured from the first request
            of a bucket.
        max_requests: Requests allowed per window. Values <= 0 deny everything.
        fail_open: Whether callers should let requests through when the
            limiter itself fails unexpectedly.
    """

    window_ms: int
    max_requests: int
    fail_open: bool = False

    @property
    def is_valid(self) -> bool:
        return self.window_ms > 0 and self.max_requests > 0


@dataclass(frozen=True)
class RateLimitResult:
    """Result of a rate limit check.

    Attributes:
        allowed: Whether the request is allowed to proceed.
        limit: Max requests per window.
        remaining: Remaining requests in the current window (0 when blocked).
        reset_at_ms: Epoch milliseconds when the current window ends.
        retry_after_seconds: Suggested wait time in seconds when blocked.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at_ms: int
    retry_after_seconds: int | None = None


class AbstractRateLimiter(ABC):
    """Interface for rate limiters."""

    @abstractmethod
    def check(self, key: str, policy: RateLimitPolicy) -> RateLimitResult:
        """Count one request for ``key`` and decide whether it may proceed.

        Implementations must not raise for a misconfigured policy; they
        deny the request instead.

        Args:
            key: Subject being throttled, e.g. ``"review:203.0.113.7"``.
            policy: Window and ceiling to apply.

        Returns:
            RateLimitResult describing whether it was allowed.
        """
        raise NotImplementedError

    @abstractmethod
    def purge_expired(self, now_ms: int | None = None) -> int:
        """Drop state for windows that have already ended.

        Returns:
            Number of buckets removed.
        """
        raise NotImplementedError

    @abstractmethod
    def bucket_count(self) -> int:
        """Number of keys currently tracked."""
        raise NotImplementedError
