"""Review validation and provider rating aggregation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from profind.core.errors import ValidationAppError
from profind.schemas.review import ReviewSubmission
from profind.utils.phone import is_valid_guyanese_phone

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


@dataclass(frozen=True)
class RatingSummary:
    avg_rating: float
    review_count: int
    recommend_pct: int | None = None


def recompute_rating(
    ratings: Iterable[float],
    recommendations: Iterable[bool] | None = None,
) -> RatingSummary:
    """Aggregate the ratings of a provider's non-deleted reviews.

    Args:
        ratings: Rating of every live review.
        recommendations: Optional "would recommend" answers for the same
            reviews.

    Returns:
        RatingSummary with the mean rounded to two decimals and clamped to
        [0.0, 5.0]; an empty input yields 0.0 over 0 reviews.
    """
    values = [float(r) for r in ratings]
    if not values:
        return RatingSummary(avg_rating=0.0, review_count=0)

    avg = round(sum(values) / len(values), 2)
    avg = min(float(MAX_RATING), max(0.0, avg))

    recommend_pct = None
    if recommendations is not None:
        answers = list(recommendations)
        if answers:
            recommend_pct = round(100 * sum(1 for a in answers if a) / len(answers))

    return RatingSummary(avg_rating=avg, review_count=len(values), recommend_pct=recommend_pct)


def validate_review(submission: ReviewSubmission) -> ReviewSubmission:
    """Check a review submission and return a trimmed copy.

    Raises:
        ValidationAppError: If required fields are missing, the rating is
            outside 1 to 5, or the reviewer phone is not a local number.
    """
    missing = [
        field
        for field in ("provider_id", "reviewer_name", "reviewer_phone", "rating")
        if not getattr(submission, field)
    ]
    if missing:
        raise ValidationAppError(
            code="missing_fields",
            message=f"Missing required fields: {', '.join(missing)}",
            details={"context": {"missing": missing}},
        )

    rating = submission.rating
    if rating is None or not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationAppError(
            code="invalid_rating",
            message="Rating must be between 1 and 5",
            details={"min_value": MIN_RATING, "max_value": MAX_RATING, "actual_value": rating or 0},
        )

    if not is_valid_guyanese_phone(submission.reviewer_phone or ""):
        raise ValidationAppError(
            code="invalid_phone",
            message="Reviewer phone must be a 7-digit local number",
            details={"field": "reviewer_phone"},
        )

    return submission.model_copy(
        update={
            "reviewer_name": (submission.reviewer_name or "").strip(),
            "reviewer_phone": (submission.reviewer_phone or "").strip(),
            "reviewer_area": submission.reviewer_area.strip() if submission.reviewer_area else None,
            "review_text": submission.review_text.strip() if submission.review_text else None,
            "job_description": submission.job_description.strip() if submission.job_description else None,
        }
    )


def apply_review(submission: ReviewSubmission) -> RatingSummary:
    """Validate a submission and recompute the provider's rating with it included."""

    review = validate_review(submission)
    summary = recompute_rating(
        [*review.existing_ratings, review.rating],
        recommendations=[*review.existing_recommendations, review.would_recommend],
    )
    logger.info(
        "review.accepted",
        extra={
            "provider_id": review.provider_id,
            "rating": review.rating,
            "review_count": summary.review_count,
            "avg_rating": summary.avg_rating,
            "recommend_pct": summary.recommend_pct,
            "reviewer_name": review.reviewer_name,
        },
    )
    return summary
