"""In-memory rate limiter.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Bucket state lives in an explicitly owned ``InMemoryBucketStore`` so tests
  (or separate subsystems) can build independent limiters.
- Updates to one key are serialised by a striped lock; different keys
  rarely contend.
"""

from __future__ import annotations

import logging
import math
import threading
import time
import zlib
from dataclasses import dataclass
from typing import Callable, Iterator

from profind.adapters.rate_limit.base import (
    AbstractRateLimiter,
    RateLimitPolicy,
    RateLimitResult,
)

logger = logging.getLogger(__name__)

DEFAULT_LOCK_STRIPES = 64


@dataclass
class RateLimitBucket:
    window_start_ms: int
    reset_at_ms: int
    count: int


class InMemoryBucketStore:
    """Mapping of rate limit key to bucket, plus the locks guarding it.

    ``lock_for(key)`` returns the lock that serialises updates to that key.
    Insertions and deletions on the mapping itself happen under an internal
    guard that is always taken after a key lock, never before.
    """

    def __init__(self, *, lock_stripes: int = DEFAULT_LOCK_STRIPES) -> None:
        if lock_stripes < 1:
            raise ValueError("lock_stripes must be >= 1")
        self._buckets: dict[str, RateLimitBucket] = {}
        self._guard = threading.Lock()
        self._stripes = [threading.Lock() for _ in range(lock_stripes)]

    def lock_for(self, key: str) -> threading.Lock:
        return self._stripes[zlib.crc32(key.encode("utf-8")) % len(self._stripes)]

    def get(self, key: str) -> RateLimitBucket | None:
        with self._guard:
            return self._buckets.get(key)

    def put(self, key: str, bucket: RateLimitBucket) -> None:
        with self._guard:
            self._buckets[key] = bucket

    def discard_if_expired(self, key: str, now_ms: int) -> bool:
        """Remove ``key`` if its window ended at or before ``now_ms``.

        Callers must hold ``lock_for(key)``.
        """
        with self._guard:
            bucket = self._buckets.get(key)
            if bucket is not None and bucket.reset_at_ms <= now_ms:
                del self._buckets[key]
                return True
        return False

    def keys(self) -> Iterator[str]:
        with self._guard:
            snapshot = list(self._buckets)
        return iter(snapshot)

    def __len__(self) -> int:
        with self._guard:
            return len(self._buckets)


class InMemoryRateLimiter(AbstractRateLimiter):
    """Counting rate limiter with a window that opens on a key's first request.

    The first request for a key (or the first after its window elapsed)
    starts a fresh bucket with ``count = 1``. Each later request in the window
    increments the count and is allowed while ``count <= max_requests``.
    """

    def __init__(
        self,
        *,
        store: InMemoryBucketStore | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the limiter.

        Args:
            store: Bucket storage; a private store is created when omitted.
            clock: Time source returning UNIX time in seconds.
        """
        self._store = store if store is not None else InMemoryBucketStore()
        self._clock = clock

    @property
    def store(self) -> InMemoryBucketStore:
        return self._store

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _denied(self, policy: RateLimitPolicy, now_ms: int) -> RateLimitResult:
        logger.warning(
            "rate_limit.invalid_policy",
            extra={"window_ms": policy.window_ms, "max_requests": policy.max_requests},
        )
        return RateLimitResult(
            allowed=False,
            limit=max(0, policy.max_requests),
            remaining=0,
            reset_at_ms=now_ms + max(0, policy.window_ms),
            retry_after_seconds=None,
        )

    def check(self, key: str, policy: RateLimitPolicy) -> RateLimitResult:
        """Count one request for ``key`` under ``policy``.

        Args:
            key: Subject being throttled.
            policy: Window length and request ceiling.

        Returns:
            RateLimitResult; a policy with a non-positive ceiling or window
            always yields ``allowed=False``.
        """
        now_ms = self._now_ms()
        if not policy.is_valid:
            return self._denied(policy, now_ms)

        with self._store.lock_for(key):
            bucket = self._store.get(key)
            if bucket is None or now_ms - bucket.window_start_ms >= policy.window_ms:
                bucket = RateLimitBucket(
                    window_start_ms=now_ms,
                    reset_at_ms=now_ms + policy.window_ms,
                    count=1,
                )
                self._store.put(key, bucket)
            else:
                bucket.count += 1
            count = bucket.count
            reset_at_ms = bucket.reset_at_ms

        allowed = count <= policy.max_requests
        remaining = max(0, policy.max_requests - count)
        retry_after = None
        if not allowed:
            retry_after = max(1, math.ceil((reset_at_ms - now_ms) / 1000))

        return RateLimitResult(
            allowed=allowed,
            limit=policy.max_requests,
            remaining=remaining,
            reset_at_ms=reset_at_ms,
            retry_after_seconds=retry_after,
        )

    def purge_expired(self, now_ms: int | None = None) -> int:
        now_ms = self._now_ms() if now_ms is None else now_ms
        removed = 0
        for key in self._store.keys():
            with self._store.lock_for(key):
                if self._store.discard_if_expired(key, now_ms):
                    removed += 1
        if removed:
            logger.info("rate_limit.purged", extra={"removed": removed})
        return removed

    def bucket_count(self) -> int:
        return len(self._store)
