import logging

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from profind.adapters.rate_limit.policies import RateLimitAction
from profind.core.rate_limit import rate_limit
from profind.schemas.search import (
    MatchRequest,
    MatchResponse,
    SearchLogEvent,
    SearchRequest,
    SearchResponse,
    SlotUsageSummary,
    SuccessResponse,
)
from profind.services.listing_service import to_listings
from profind.services.search_service import match_providers, search
from profind.services.tiering import slot_usage

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Search"])


@router.post(
    "/search",
    response_model=SearchResponse,
    dependencies=[Depends(rate_limit(RateLimitAction.SEARCH))],
)
async def search_providers(payload: SearchRequest) -> SearchResponse:
    """Filter and rank the supplied provider records.

    Records come from the caller's record store; the response lists the
    matching providers best first, shaped as result cards.
    """
    filters = payload.filters
    ranked = search(payload.records, filters)
    response = SearchResponse(
        count=len(ranked),
        results=to_listings(ranked, trade=filters.trade),
    )
    if filters.trade:
        usage = slot_usage(payload.records, filters.trade, filters.area)
        response.slot_limit = usage.limit
        response.slot_usage = SlotUsageSummary(
            trade=usage.trade,
            area=usage.area,
            filled=usage.filled,
            limit=usage.limit,
        )
    return response


@router.post(
    "/match",
    response_model=MatchResponse,
    dependencies=[Depends(rate_limit(RateLimitAction.PUBLIC_SUBMIT))],
)
async def match_for_quote(payload: MatchRequest) -> MatchResponse:
    """Pick up to ``limit`` verified providers for a "Get 3 Quotes" request."""
    result = match_providers(payload.records, payload.trade, payload.area, payload.limit)
    logger.info(
        "match.completed",
        extra={"trade": payload.trade, "area": payload.area, "match_count": result.match_count},
    )
    return MatchResponse(
        match_count=result.match_count,
        providers=to_listings(result.providers, trade=payload.trade),
    )


@router.post(
    "/search-log",
    response_model=SuccessResponse,
    dependencies=[Depends(rate_limit(RateLimitAction.ANALYTICS, silent=True))],
    openapi_extra={
        "requestBody": {"content": {"application/json": {"schema": SearchLogEvent.model_json_schema()}}}
    },
)
async def log_search(request: Request) -> SuccessResponse:
    """Record a search for demand analytics.

    Always reports success: throttled or malformed events are dropped
    silently so that analytics never breaks the search page. The body is
    validated here rather than by FastAPI for the same reason.
    """
    if request.state.rate_limited:
        return SuccessResponse()

    body = await request.body()
    try:
        event = SearchLogEvent.model_validate_json(body or b"{}")
    except ValidationError as exc:
        logger.info("search.log_rejected", extra={"error_count": exc.error_count()})
        return SuccessResponse()

    logger.info(
        "search.logged",
        extra={
            "query": event.query,
            "trade": event.trade,
            "area": event.area,
            "results_count": event.results_count,
        },
    )
    return SuccessResponse()
