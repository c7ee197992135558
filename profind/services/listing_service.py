"""Shape ranked provider records into result cards."""

from __future__ import annotations

from datetime import datetime

from profind.schemas.provider import ProviderRecord
from profind.schemas.search import ProviderListing
from profind.services.tiering import compute_trust_score, format_tenure, get_trust_tier
from profind.utils.phone import format_phone, is_valid_guyanese_phone
from profind.utils.pricing import format_price_range
from profind.utils.whatsapp import get_whatsapp_link


def to_listing(
    record: ProviderRecord,
    *,
    trade: str | None = None,
    now: datetime | None = None,
) -> ProviderListing:
    """Build the card payload for one provider.

    Contact fields are left empty when the stored phone is not a usable
    local number.
    """
    score = compute_trust_score(record)

    phone_display = whatsapp_link = None
    if record.phone and is_valid_guyanese_phone(record.phone):
        phone_display = format_phone(record.phone)
        whatsapp_link = get_whatsapp_link(record.phone, record.name, trade)

    price_range = None
    if record.price_range_low is not None and record.price_range_high is not None:
        price_range = format_price_range(record.price_range_low, record.price_range_high)

    return ProviderListing(
        provider=record,
        trust_tier=get_trust_tier(score).id,
        trust_score=score,
        tenure=format_tenure(record.created_at, now),
        phone_display=phone_display,
        whatsapp_link=whatsapp_link,
        price_range=price_range,
    )


def to_listings(records: list[ProviderRecord], *, trade: str | None = None) -> list[ProviderListing]:
    return [to_listing(record, trade=trade) for record in records]
