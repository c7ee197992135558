"""Input sanitization helpers for user-supplied search and contact fields."""

import re

MAX_SEARCH_INPUT_CHARS = 200
MAX_PHONE_CHARS = 15

VALID_ROLES = ("customer", "provider", "shop_owner")

# Filter-syntax metacharacters: field separator, list separator, grouping,
# wildcard and escape.
_FILTER_METACHARS = re.compile(r"[.,()%\\]")
_WHITESPACE = re.compile(r"\s+")
_NON_PHONE = re.compile(r"[^\d+]")


def sanitize_search_input(text: str) -> str:
    """Strip filter metacharacters from a free-text query.

    Examples:
        >>> sanitize_search_input("  pipe (leak),  kitty%  ")
        'pipe leak kitty'
    """
    cleaned = _FILTER_METACHARS.sub(" ", text)
    cleaned = _WHITESPACE.sub(" ", cleaned).strip()
    return cleaned[:MAX_SEARCH_INPUT_CHARS]


def is_valid_role(role: str) -> bool:
    return role in VALID_ROLES


def sanitize_phone(phone: str) -> str:
    """Keep digits and '+' only, capped at 15 characters."""
    return _NON_PHONE.sub("", phone)[:MAX_PHONE_CHARS]
