"""Tests for phone, WhatsApp, price and input sanitization helpers."""

from urllib.parse import parse_qs, urlparse

import pytest

from profind.utils.phone import (
    format_phone,
    format_phone_international,
    is_valid_guyanese_phone,
)
from profind.utils.pricing import format_gyd, format_gyd_compact, format_price_range
from profind.utils.sanitize import is_valid_role, sanitize_phone, sanitize_search_input
from profind.utils.whatsapp import (
    format_whatsapp_url,
    get_review_request_link,
    get_whatsapp_link,
    get_whatsapp_share_link,
)


class TestPhone:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("6001234", "600-1234"),
            ("5926001234", "600-1234"),
            ("+592 600-1234", "600-1234"),
            ("12345", "12345"),
        ],
    )
    def test_format_phone(self, raw: str, expected: str) -> None:
        assert format_phone(raw) == expected

    def test_international(self) -> None:
        assert format_phone_international("600-1234") == "+5926001234"
        assert format_phone_international("+592 600 1234") == "+5926001234"

    @pytest.mark.parametrize(
        "raw,valid",
        [("6001234", True), ("592 222 3344", True), ("1001234", False), ("600123", False), ("", False)],
    )
    def test_validation(self, raw: str, valid: bool) -> None:
        assert is_valid_guyanese_phone(raw) is valid


class TestWhatsApp:
    def test_provider_link_adds_country_code_and_message(self) -> None:
        link = get_whatsapp_link("600-1234", "Ravi", "plumbing")
        parsed = urlparse(link)

        assert parsed.netloc == "wa.me"
        assert parsed.path == "/5926001234"
        text = parse_qs(parsed.query)["text"][0]
        assert text == "Hi Ravi, I found you on ProFind Guyana. I need help with plumbing. Are you available?"

    def test_provider_link_without_trade(self) -> None:
        text = parse_qs(urlparse(get_whatsapp_link("5926001234", "Ravi")).query)["text"][0]
        assert text == "Hi Ravi, I found you on ProFind Guyana. Are you available?"

    def test_message_is_percent_encoded(self) -> None:
        url = format_whatsapp_url("6001234", "a b&c")
        assert url == "https://wa.me/5926001234?text=a%20b%26c"

    def test_share_link_has_no_recipient(self) -> None:
        link = get_whatsapp_share_link("Ravi", "Plumber", "https://profind.gy/provider/p-1")
        assert link.startswith("https://wa.me/?text=")
        assert "https%3A%2F%2Fprofind.gy%2Fprovider%2Fp-1" in link

    def test_review_request_link(self) -> None:
        link = get_review_request_link("222-3344", "Ravi", "https://profind.gy/review/p-1")
        assert link.startswith("https://wa.me/5922223344?text=")
        # em dash is percent-encoded as UTF-8
        assert "Guyana%20%E2%80%94%20it%20helps" in link


class TestPricing:
    def test_format_gyd(self) -> None:
        assert format_gyd(15000) == "$15,000"
        assert format_gyd(0) == "$0"
        assert format_gyd(1234.5) == "$1,234.5"

    def test_price_range(self) -> None:
        assert format_price_range(8000, 15000) == "$8,000 - $15,000"

    @pytest.mark.parametrize(
        "amount,expected",
        [(950, "$950"), (15000, "$15K"), (2500, "$3K"), (1_500_000, "$1.5M")],
    )
    def test_compact(self, amount: int, expected: str) -> None:
        assert format_gyd_compact(amount) == expected


class TestSanitize:
    def test_search_input_strips_filter_syntax(self) -> None:
        assert sanitize_search_input("name.ilike.%x%,(or)") == "name ilike x or"

    def test_search_input_capped(self) -> None:
        assert len(sanitize_search_input("a" * 500)) == 200

    def test_phone(self) -> None:
        assert sanitize_phone("+592 (600) 1234 ext") == "+5926001234"
        assert len(sanitize_phone("1" * 40)) == 15

    def test_roles(self) -> None:
        assert is_valid_role("provider")
        assert not is_valid_role("admin")
