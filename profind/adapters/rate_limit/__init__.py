"""Rate limiting adapters.

A small abstraction layer: the service starts with an in-memory limiter and
can later move to Redis or another shared store without touching the API
layer.
"""

from profind.adapters.rate_limit.base import (
    AbstractRateLimiter,
    RateLimitPolicy,
    RateLimitResult,
)
from profind.adapters.rate_limit.in_memory import (
    InMemoryBucketStore,
    InMemoryRateLimiter,
    RateLimitBucket,
)
from profind.adapters.rate_limit.policies import (
    RATE_LIMITS,
    RateLimitAction,
    build_rate_limit_key,
    get_policy,
)

__all__ = [
    "AbstractRateLimiter",
    "InMemoryBucketStore",
    "InMemoryRateLimiter",
    "RATE_LIMITS",
    "RateLimitAction",
    "RateLimitBucket",
    "RateLimitPolicy",
    "RateLimitResult",
    "build_rate_limit_key",
    "get_policy",
]
