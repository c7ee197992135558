"""WhatsApp deep links for contacting providers and sharing profiles."""

from urllib.parse import quote

from profind.utils.phone import with_country_code

BRAND = "ProFind Guyana"
WA_BASE_URL = "https://wa.me"


def _encode(message: str) -> str:
    # Match encodeURIComponent: only unreserved marks stay literal.
    return quote(message, safe="-_.!~*'()")


def format_whatsapp_url(phone: str, message: str) -> str:
    return f"{WA_BASE_URL}/{with_country_code(phone)}?text={_encode(message)}"


def get_whatsapp_link(phone: str, provider_name: str, trade: str | None = None) -> str:
    """Link that opens a chat with a provider and names where the lead came from."""
    trade_text = f" I need help with {trade}." if trade else ""
    message = f"Hi {provider_name}, I found you on {BRAND}.{trade_text} Are you available?"
    return format_whatsapp_url(phone, message)


def get_whatsapp_share_link(provider_name: str, trade: str, profile_url: str) -> str:
    message = f"Check out {provider_name} ({trade}) on {BRAND} → {profile_url}"
    return f"{WA_BASE_URL}/?text={_encode(message)}"


def get_review_request_link(customer_phone: str, provider_name: str, review_url: str) -> str:
    """Link a provider sends to a customer asking for a review."""
    message = (
        "Hi! Thanks for using my services. If you have a minute, I'd appreciate "
        f"a review on {BRAND} — it helps me get more work. Just tap here: {review_url}"
    )
    return format_whatsapp_url(customer_phone, message)
