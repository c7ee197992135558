"""Named rate limit policies and key derivation.

Each public action has its own policy. Low-stakes actions (analytics,
search) fail open when the limiter breaks; anything that writes user
content fails closed.
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping

from profind.adapters.rate_limit.base import RateLimitPolicy

ANONYMOUS = "anonymous"


class RateLimitAction(str, Enum):
    PUBLIC_SUBMIT = "public_submit"
    REVIEW = "review"
    AUTH = "auth"
    UPLOAD = "upload"
    ANALYTICS = "analytics"
    SEARCH = "search"


RATE_LIMITS: dict[RateLimitAction, RateLimitPolicy] = {
    # Public form submissions: 10 per 5 minutes
    RateLimitAction.PUBLIC_SUBMIT: RateLimitPolicy(window_ms=300_000, max_requests=10),
    # Review submissions: 5 per 10 minutes
    RateLimitAction.REVIEW: RateLimitPolicy(window_ms=600_000, max_requests=5),
    # Auth attempts: 10 per 15 minutes
    RateLimitAction.AUTH: RateLimitPolicy(window_ms=900_000, max_requests=10),
    # File uploads: 20 per 10 minutes
    RateLimitAction.UPLOAD: RateLimitPolicy(window_ms=600_000, max_requests=20),
    # Analytics/logging: 60 per minute
    RateLimitAction.ANALYTICS: RateLimitPolicy(window_ms=60_000, max_requests=60, fail_open=True),
    # Search: 30 per minute
    RateLimitAction.SEARCH: RateLimitPolicy(window_ms=60_000, max_requests=30, fail_open=True),
}


def get_policy(action: RateLimitAction | str) -> RateLimitPolicy:
    """Look up the policy for an action name.

    Raises:
        ValueError: If the action is unknown.
    """
    return RATE_LIMITS[RateLimitAction(action)]


def build_rate_limit_key(
    prefix: str,
    headers: Mapping[str, str],
    client_host: str | None = None,
) -> str:
    """Build a ``"{prefix}:{ip}"`` key for the request source.

    The first hop of X-Forwarded-For wins, then X-Real-IP, then the socket
    peer address, then ``"anonymous"``.

    Examples:
        >>> build_rate_limit_key("review", {"x-forwarded-for": "1.2.3.4, 10.0.0.1"})
        'review:1.2.3.4'
        >>> build_rate_limit_key("search", {}, None)
        'search:anonymous'
    """
    lowered = {k.lower(): v for k, v in headers.items()}
    forwarded = lowered.get("x-forwarded-for", "")
    ip = forwarded.split(",")[0].strip() if forwarded else ""
    if not ip:
        ip = lowered.get("x-real-ip", "").strip()
    if not ip:
        ip = client_host or ANONYMOUS
    return f"{prefix}:{ip}"
