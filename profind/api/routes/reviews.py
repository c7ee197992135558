from fastapi import APIRouter, Depends

from profind.adapters.rate_limit.policies import RateLimitAction
from profind.core.rate_limit import rate_limit
from profind.schemas.review import ReviewResponse, ReviewSubmission
from profind.services.rating_service import apply_review

router = APIRouter(tags=["Reviews"])


@router.post(
    "/reviews",
    response_model=ReviewResponse,
    dependencies=[Depends(rate_limit(RateLimitAction.REVIEW))],
)
async def submit_review(submission: ReviewSubmission) -> ReviewResponse:
    """Validate a review and return the provider's recomputed rating.

    Raises:
        ValidationAppError: Missing fields, rating outside 1-5 or a bad
            phone number (rendered as 400 by the global handler).
    """
    summary = apply_review(submission)
    return ReviewResponse(
        provider_id=submission.provider_id or "",
        avg_rating=summary.avg_rating,
        review_count=summary.review_count,
        recommend_pct=summary.recommend_pct,
    )
