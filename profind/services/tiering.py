"""Plan and trust tiering.

Plan tiers decide how many boosted listings a result page may show. Trust
tiers summarise a provider's verification and review history into a badge.
Both are pure lookups; nothing here selects which listings get boosted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Iterable

from profind.core.config import settings

if TYPE_CHECKING:
    from profind.schemas.provider import ProviderRecord

logger = logging.getLogger(__name__)


class PlanTier(str, Enum):
    """Subscription level, ordered free < pro < premium."""

    FREE = "free"
    PRO = "pro"
    PREMIUM = "premium"

    @property
    def rank(self) -> int:
        return _PLAN_RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, PlanTier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, PlanTier):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, PlanTier):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, PlanTier):
            return NotImplemented
        return self.rank >= other.rank


_PLAN_RANK = {PlanTier.FREE: 0, PlanTier.PRO: 1, PlanTier.PREMIUM: 2}

# Billing plan ids used by provider and shop subscriptions
_PLAN_ID_ALIASES: dict[str, PlanTier] = {
    "free": PlanTier.FREE,
    "pro": PlanTier.PRO,
    "premium": PlanTier.PREMIUM,
    "boost": PlanTier.PREMIUM,
    "provider_free": PlanTier.FREE,
    "provider_pro": PlanTier.PRO,
    "provider_boost": PlanTier.PREMIUM,
    "shop_free": PlanTier.FREE,
    "shop_pro": PlanTier.PRO,
    "shop_boost": PlanTier.PREMIUM,
}


def parse_plan_tier(plan: PlanTier | str | None) -> PlanTier:
    """Map a plan id or tier name to a PlanTier.

    Unknown or missing values fall back to the free tier.

    Examples:
        >>> parse_plan_tier("provider_boost")
        <PlanTier.PREMIUM: 'premium'>
        >>> parse_plan_tier("gold")
        <PlanTier.FREE: 'free'>
    """
    if isinstance(plan, PlanTier):
        return plan
    if not plan:
        return PlanTier.FREE
    tier = _PLAN_ID_ALIASES.get(str(plan).strip().lower())
    if tier is None:
        logger.debug("plan.unknown_id", extra={"plan_id": plan})
        return PlanTier.FREE
    return tier


def slot_limits() -> dict[PlanTier, int]:
    """Boosted slot limit per tier, read from settings."""

    return {
        PlanTier.FREE: 0,
        PlanTier.PRO: settings.app.pro_slot_limit,
        PlanTier.PREMIUM: settings.app.premium_slot_limit,
    }


def get_slot_limit(plan_tier: PlanTier | str | None) -> int:
    """Return how many boosted listings a result page may show for a tier.

    Args:
        plan_tier: Tier enum, tier name or billing plan id.

    Returns:
        0 for free (and anything unrecognised), the configured pro and
        premium limits otherwise.
    """
    return slot_limits()[parse_plan_tier(plan_tier)]


@dataclass(frozen=True)
class TrustTier:
    id: str
    label: str
    min_points: int


TRUST_TIERS: tuple[TrustTier, ...] = (
    TrustTier("new", "New", 0),
    TrustTier("verified", "Verified", 20),
    TrustTier("trusted", "Trusted", 50),
    TrustTier("elite", "Elite", 80),
)


def compute_trust_score(record: "ProviderRecord") -> int:
    """Score a provider's verification and track record, 0 to 100."""

    score = 0
    if record.is_claimed:
        score += 5
    if record.is_verified:
        score += 15
    if record.id_verified:
        score += 15
    if record.bit_certified:
        score += 10
    score += min(record.review_count, 25)
    # JS Math.round semantics: halves round up
    score += int(record.avg_rating * 3 + 0.5)
    score += min(record.years_experience or 0, 10)
    return score


def get_trust_tier(score: int) -> TrustTier:
    for tier in reversed(TRUST_TIERS):
        if score >= tier.min_points:
            return tier
    return TRUST_TIERS[0]


def get_provider_trust_tier(record: "ProviderRecord") -> TrustTier:
    return get_trust_tier(compute_trust_score(record))


def tenure_months(created_at: datetime, now: datetime | None = None) -> int:
    now = now or datetime.now(timezone.utc)
    return (now.year - created_at.year) * 12 + (now.month - created_at.month)


def format_tenure(created_at: datetime, now: datetime | None = None) -> str:
    """Human readable membership length, e.g. ``"2yr 3mo"``."""

    months = tenure_months(created_at, now)
    if months < 1:
        return "New member"
    if months < 12:
        return f"{months} month{'' if months == 1 else 's'}"
    years, rem = divmod(months, 12)
    if rem == 0:
        return f"{years} year{'' if years == 1 else 's'}"
    return f"{years}yr {rem}mo"


# Verified providers a trade can list per area before the directory is full
TRADE_SLOT_LIMITS: dict[str, int] = {
    "plumber": 5,
    "electrician": 5,
    "ac-technician": 5,
    "carpenter": 5,
    "mason": 5,
    "painter": 7,
    "welder": 5,
    "mechanic": 7,
}
DEFAULT_TRADE_SLOT_LIMIT = 5


@dataclass(frozen=True)
class SlotUsage:
    trade: str
    filled: int
    limit: int
    area: str | None = None

    @property
    def is_full(self) -> bool:
        return self.filled >= self.limit


def get_trade_slot_limit(trade: str) -> int:
    return TRADE_SLOT_LIMITS.get(trade, DEFAULT_TRADE_SLOT_LIMIT)


def slot_usage(
    records: Iterable["ProviderRecord"],
    trade: str,
    area: str | None = None,
) -> SlotUsage:
    """Count the verified providers occupying a trade's slots.

    Args:
        records: Candidate records.
        trade: Trade tag whose capacity is reported.
        area: When given, only providers serving this area are counted.

    Returns:
        SlotUsage with the filled count against the trade's limit.
    """
    filled = sum(
        1
        for r in records
        if r.is_verified and trade in r.trades and (area is None or area in r.areas)
    )
    return SlotUsage(trade=trade, filled=filled, limit=get_trade_slot_limit(trade), area=area)
