"""Guyanese phone number formatting and validation."""

import re

COUNTRY_CODE = "592"

_NON_DIGIT = re.compile(r"\D")


def _digits(phone: str) -> str:
    return _NON_DIGIT.sub("", phone)


def local_number(phone: str) -> str:
    """Digits of ``phone`` without the 592 country code."""
    digits = _digits(phone)
    return digits[len(COUNTRY_CODE):] if digits.startswith(COUNTRY_CODE) else digits


def format_phone(phone: str) -> str:
    """Format a phone number for display.

    Examples:
        >>> format_phone("+592 600 1234")
        '600-1234'
        >>> format_phone("12345")
        '12345'
    """
    local = local_number(phone)
    if len(local) == 7:
        return f"{local[:3]}-{local[3:]}"
    return local


def format_phone_international(phone: str) -> str:
    """Format a phone number for international dialing (``+592XXXXXXX``)."""
    return f"+{COUNTRY_CODE}{local_number(phone)}"


def with_country_code(phone: str) -> str:
    """Digits of ``phone`` with the 592 prefix added when missing."""
    digits = _digits(phone)
    return digits if digits.startswith(COUNTRY_CODE) else f"{COUNTRY_CODE}{digits}"


def is_valid_guyanese_phone(phone: str) -> bool:
    """Accept 7-digit local numbers starting 2-9, with or without 592."""
    local = local_number(phone)
    return len(local) == 7 and local[0] in "23456789"
