"""Pydantic schemas for provider records and search filters."""

from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from profind.services.tiering import PlanTier, parse_plan_tier

SortBy = Literal["rating", "reviews", "newest"]


class ProviderRecord(BaseModel):
    """A tradesperson listing as supplied by the record store."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1, description="Stable provider identifier.")
    name: str = Field(..., description="Display name.")
    description: str | None = Field(None, description="Free-text profile description.")
    trades: set[str] = Field(default_factory=set, description="Trade tags, e.g. 'plumber'.")
    areas: set[str] = Field(default_factory=set, description="Service-area tags, e.g. 'gt-kitty'.")
    avg_rating: float = Field(0.0, ge=0.0, le=5.0, description="Mean review rating.")
    review_count: int = Field(0, ge=0)
    plan_tier: PlanTier = Field(PlanTier.FREE, description="Subscription tier or billing plan id.")
    is_featured: bool = False
    is_claimed: bool = False
    is_verified: bool = False
    id_verified: bool = False
    bit_certified: bool = False
    available_now: bool = False
    years_experience: int | None = Field(None, ge=0)
    phone: str | None = Field(None, description="Contact number, local or with 592 prefix.")
    price_range_low: int | None = Field(None, ge=0, description="Typical job price floor in GYD.")
    price_range_high: int | None = Field(None, ge=0, description="Typical job price ceiling in GYD.")
    created_at: datetime = Field(..., description="Listing creation time.")

    @field_validator("plan_tier", mode="before")
    @classmethod
    def _parse_plan(cls, value: Any) -> PlanTier:
        return parse_plan_tier(value)

    @field_validator("created_at")
    @classmethod
    def _ensure_aware(cls, value: datetime) -> datetime:
        # Naive timestamps are taken as UTC so mixed inputs stay comparable.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class SearchFilters(BaseModel):
    """Optional constraints for a provider search.

    Every field is optional and an absent (or false/blank) value means
    "unconstrained". Unknown fields are ignored rather than rejected.

    Attributes:
        trade: Keep records whose trade tags contain this tag.
        area: Keep records whose service-area tags contain this tag.
        available_now: When True, keep only providers available now.
        query: Case-insensitive substring of name or description.
        verified_only: When True, keep only verified providers.
        bit_certified_only: When True, keep only BIT-certified providers.
        sort_by: Primary ordering; unrecognised values fall back to "rating".
    """

    model_config = ConfigDict(extra="ignore")

    trade: str | None = None
    area: str | None = None
    available_now: bool | None = None
    query: str | None = None
    verified_only: bool | None = None
    bit_certified_only: bool | None = None
    sort_by: SortBy = "rating"

    @field_validator("trade", "area", "query", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("sort_by", mode="before")
    @classmethod
    def _default_sort(cls, value: Any) -> Any:
        if value not in ("rating", "reviews", "newest"):
            return "rating"
        return value
