"""Rate limiting dependencies for FastAPI routes.

Wires the rate limiting adapter into the HTTP layer.

- The limiter instance is owned by the application (``app.state``), not by
  this module, so every app built by the factory has its own buckets.
- Each route declares the action it performs; the action selects the policy.
- Keys are derived from the client address and action name, and hashed
  before they reach the logs.
"""

from __future__ import annotations

import hashlib
import math
import logging
from typing import Awaitable, Callable

from fastapi import Depends, Request

from profind.adapters.rate_limit.base import AbstractRateLimiter, RateLimitPolicy
from profind.adapters.rate_limit.policies import (
    RateLimitAction,
    build_rate_limit_key,
    get_policy,
)
from profind.core.config import settings
from profind.core.errors import RateLimitAppError

logger = logging.getLogger(__name__)


def get_rate_limiter(request: Request) -> AbstractRateLimiter:
    """Return the limiter owned by the running application."""

    return request.app.state.rate_limiter


def _hash_limiter_key(key: str) -> str:
    """Hash the rate limit key for logging without exposing client addresses."""
    return hashlib.sha256(key.encode()).hexdigest()[:16]


def _on_limiter_failure(action: RateLimitAction, policy: RateLimitPolicy, key_hash: str) -> None:
    """Apply the action's fail-open / fail-closed rule after a limiter error."""

    logger.exception(
        "rate_limit.error",
        extra={"action": action.value, "key_hash": key_hash, "fail_open": policy.fail_open},
    )
    if policy.fail_open:
        return
    raise RateLimitAppError(
        code="rate_limit_unavailable",
        message="Request could not be verified. Try again later.",
        details={"action": action.value},
    )


def rate_limit(
    action: RateLimitAction,
    *,
    silent: bool = False,
) -> Callable[..., Awaitable[None]]:
    """Build a dependency enforcing the policy registered for ``action``.

    Args:
        action: Which named policy to apply.
        silent: When True, throttled requests are not rejected; the route
            sees ``request.state.rate_limited = True`` and decides what to do.

    Returns:
        An async FastAPI dependency.
    """

    policy = get_policy(action)

    async def enforce_rate_limit(
        request: Request,
        limiter: AbstractRateLimiter = Depends(get_rate_limiter),
    ) -> None:
        request.state.rate_limited = False
        if not settings.app.rate_limit_enabled:
            return

        client_host = request.client.host if request.client else None
        key = build_rate_limit_key(action.value, request.headers, client_host)
        key_hash = _hash_limiter_key(key)

        try:
            result = limiter.check(key, policy)
        except Exception:
            _on_limiter_failure(action, policy, key_hash)
            return

        if result.allowed:
            logger.debug(
                "rate_limit.allowed",
                extra={
                    "action": action.value,
                    "key_hash": key_hash,
                    "limit": result.limit,
                    "remaining": result.remaining,
                },
            )
            return

        retry_after = result.retry_after_seconds or 0
        logger.warning(
            "rate_limit.exceeded",
            extra={
                "action": action.value,
                "key_hash": key_hash,
                "limit": result.limit,
                "window_ms": policy.window_ms,
                "retry_after_s": retry_after,
                "silent": silent,
            },
        )

        if silent:
            request.state.rate_limited = True
            return

        raise RateLimitAppError(
            code="rate_limit_exceeded",
            message="Too many requests. Please try again later.",
            details={
                "action": action.value,
                "retry_after": retry_after,
                "max_value": result.limit,
                "reset_at": math.ceil(result.reset_at_ms / 1000),
            },
        )

    return enforce_rate_limit
