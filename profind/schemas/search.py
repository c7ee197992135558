"""Request and response schemas for the search, match and analytics endpoints."""

from pydantic import BaseModel, Field

from profind.schemas.provider import ProviderRecord, SearchFilters
from profind.services.tiering import PlanTier


class ProviderListing(BaseModel):
    """A ranked provider shaped for a result card."""

    provider: ProviderRecord
    trust_tier: str = Field(..., description="new, verified, trusted or elite.")
    trust_score: int = Field(..., ge=0)
    tenure: str = Field(..., description="Membership length, e.g. '2yr 3mo'.")
    phone_display: str | None = None
    whatsapp_link: str | None = None
    price_range: str | None = None


class SearchRequest(BaseModel):
    records: list[ProviderRecord] = Field(default_factory=list)
    filters: SearchFilters = Field(default_factory=SearchFilters)


class SlotUsageSummary(BaseModel):
    trade: str
    area: str | None = None
    filled: int = Field(..., ge=0, description="Verified providers listed for the trade.")
    limit: int = Field(..., ge=0)


class SearchResponse(BaseModel):
    count: int = Field(..., ge=0)
    results: list[ProviderListing]
    slot_limit: int | None = Field(None, description="Trade capacity; set when the search names a trade.")
    slot_usage: SlotUsageSummary | None = None


class MatchRequest(BaseModel):
    records: list[ProviderRecord] = Field(default_factory=list)
    trade: str = Field(..., min_length=1)
    area: str | None = None
    limit: int = Field(3, ge=1, le=10)


class MatchResponse(BaseModel):
    match_count: int = Field(..., ge=0)
    providers: list[ProviderListing]


class SearchLogEvent(BaseModel):
    query: str | None = Field(None, max_length=500)
    trade: str | None = None
    area: str | None = None
    results_count: int = Field(0, ge=0)


class SuccessResponse(BaseModel):
    success: bool = True


class PlanSlotsResponse(BaseModel):
    plan_tier: PlanTier
    slot_limit: int = Field(..., ge=0)


class RateLimitStatsResponse(BaseModel):
    bucket_count: int = Field(..., ge=0)


class RateLimitPurgeResponse(BaseModel):
    removed: int = Field(..., ge=0)
    bucket_count: int = Field(..., ge=0)
