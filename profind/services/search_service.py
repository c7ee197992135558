"""Provider search: filtering and ranking over caller-supplied records.

The record store is queried elsewhere; this module only narrows and orders
an in-memory list. Every function is pure and keeps no state between calls,
so results are reproducible and safe to page over.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from profind.schemas.provider import ProviderRecord, SearchFilters
from profind.utils.sanitize import sanitize_search_input

logger = logging.getLogger(__name__)

DEFAULT_MATCH_LIMIT = 3

SortKey = Callable[[ProviderRecord], tuple]


def _default_rank_key(record: ProviderRecord) -> tuple:
    """Ascending sort key for the default ordering.

    featured, plan tier, rating and review count are descending; creation
    time is ascending (older first) and the id closes any remaining tie so
    the order is total.
    """
    return (
        not record.is_featured,
        -record.plan_tier.rank,
        -record.avg_rating,
        -record.review_count,
        record.created_at,
        record.id,
    )


def _reviews_rank_key(record: ProviderRecord) -> tuple:
    return (-record.review_count,) + _default_rank_key(record)


def _newest_rank_key(record: ProviderRecord) -> tuple:
    return (-record.created_at.timestamp(),) + _default_rank_key(record)


_SORT_KEYS: dict[str, SortKey] = {
    "rating": _default_rank_key,
    "reviews": _reviews_rank_key,
    "newest": _newest_rank_key,
}


def _text_matches(record: ProviderRecord, needle: str) -> bool:
    if needle in record.name.lower():
        return True
    return bool(record.description) and needle in record.description.lower()


def matches_filters(record: ProviderRecord, filters: SearchFilters) -> bool:
    """Return True if ``record`` satisfies every constraint set in ``filters``."""

    if filters.trade and filters.trade not in record.trades:
        return False
    if filters.area and filters.area not in record.areas:
        return False
    if filters.available_now and not record.available_now:
        return False
    if filters.verified_only and not record.is_verified:
        return False
    if filters.bit_certified_only and not record.bit_certified:
        return False
    if filters.query:
        needle = sanitize_search_input(filters.query).lower()
        if needle and not _text_matches(record, needle):
            return False
    return True


def rank(records: Iterable[ProviderRecord], sort_by: str = "rating") -> list[ProviderRecord]:
    """Order records by the chosen primary key, then the default chain."""

    return sorted(records, key=_SORT_KEYS.get(sort_by, _default_rank_key))


def search(
    records: Sequence[ProviderRecord],
    filters: SearchFilters | None = None,
) -> list[ProviderRecord]:
    """Filter and rank provider records.

    Args:
        records: Candidate records fetched by the caller.
        filters: Optional constraints; ``None`` or an empty filter set keeps
            every record.

    Returns:
        A new list holding the matching records, best first. Equal inputs
        always produce the same order.
    """
    filters = filters or SearchFilters()
    matched = [record for record in records if matches_filters(record, filters)]
    ranked = rank(matched, filters.sort_by)

    logger.debug(
        "search.completed",
        extra={
            "candidates": len(records),
            "results": len(ranked),
            "trade": filters.trade,
            "area": filters.area,
            "sort_by": filters.sort_by,
        },
    )
    return ranked


@dataclass(frozen=True)
class MatchResult:
    providers: list[ProviderRecord]

    @property
    def match_count(self) -> int:
        return len(self.providers)


def _match_key(record: ProviderRecord) -> tuple:
    return (-record.avg_rating, -record.review_count) + _default_rank_key(record)


def match_providers(
    records: Sequence[ProviderRecord],
    trade: str,
    area: str | None = None,
    limit: int = DEFAULT_MATCH_LIMIT,
) -> MatchResult:
    """Pick verified providers for a quote request.

    Candidates must be verified and offer ``trade``. When ``area`` is given
    and at least one candidate serves it, the pool is narrowed to that area;
    otherwise the whole trade pool is used. Best rated first, then most
    reviewed.

    Args:
        records: Candidate records.
        trade: Required trade tag.
        area: Preferred service area.
        limit: Maximum number of providers returned.

    Returns:
        MatchResult with at most ``limit`` providers.
    """
    candidates = [r for r in records if r.is_verified and trade in r.trades]

    if area and candidates:
        in_area = [r for r in candidates if area in r.areas]
        if in_area:
            candidates = in_area

    top = sorted(candidates, key=_match_key)[: max(0, limit)]
    return MatchResult(providers=top)
