"""Pydantic schemas for review submissions."""

from pydantic import BaseModel, ConfigDict, Field


class ReviewSubmission(BaseModel):
    """A customer review as posted by the review form.

    Required-field and range checks happen in the rating service so that the
    client receives a 400 with a specific error code instead of a generic
    schema error.
    """

    model_config = ConfigDict(extra="ignore")

    provider_id: str | None = None
    reviewer_name: str | None = None
    reviewer_phone: str | None = None
    reviewer_area: str | None = None
    rating: int | None = None
    review_text: str | None = Field(None, max_length=5000)
    job_description: str | None = Field(None, max_length=2000)
    price_paid: int | None = Field(None, ge=0, description="Price paid in GYD; feeds the price guide.")
    would_recommend: bool = True
    existing_ratings: list[float] = Field(
        default_factory=list,
        description="Ratings of the provider's current non-deleted reviews.",
    )
    existing_recommendations: list[bool] = Field(
        default_factory=list,
        description="\"Would recommend\" answers of the same reviews.",
    )


class ReviewResponse(BaseModel):
    success: bool = True
    provider_id: str
    avg_rating: float = Field(..., ge=0.0, le=5.0)
    review_count: int = Field(..., ge=0)
    recommend_pct: int | None = Field(None, ge=0, le=100)
