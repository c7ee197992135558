import logging

from fastapi import APIRouter, Depends

from profind.adapters.rate_limit.base import AbstractRateLimiter
from profind.core.auth import require_admin
from profind.core.rate_limit import get_rate_limiter
from profind.schemas.search import RateLimitPurgeResponse, RateLimitStatsResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Admin"], dependencies=[Depends(require_admin)])


@router.get("/admin/rate-limits", response_model=RateLimitStatsResponse)
def rate_limit_stats(
    limiter: AbstractRateLimiter = Depends(get_rate_limiter),
) -> RateLimitStatsResponse:
    return RateLimitStatsResponse(bucket_count=limiter.bucket_count())


@router.post("/admin/rate-limits/purge", response_model=RateLimitPurgeResponse)
def purge_rate_limits(
    limiter: AbstractRateLimiter = Depends(get_rate_limiter),
) -> RateLimitPurgeResponse:
    """Drop buckets whose window has already ended."""
    removed = limiter.purge_expired()
    logger.info("admin.rate_limits_purged", extra={"removed": removed})
    return RateLimitPurgeResponse(removed=removed, bucket_count=limiter.bucket_count())
