"""Tests for named rate limit policies and key derivation."""

import pytest

from profind.adapters.rate_limit.policies import (
    RATE_LIMITS,
    RateLimitAction,
    build_rate_limit_key,
    get_policy,
)


class TestPolicies:
    def test_every_action_has_a_valid_policy(self) -> None:
        for action in RateLimitAction:
            assert RATE_LIMITS[action].is_valid

    def test_review_policy(self) -> None:
        policy = get_policy("review")
        assert policy.max_requests == 5
        assert policy.window_ms == 600_000
        assert policy.fail_open is False

    @pytest.mark.parametrize("action", [RateLimitAction.ANALYTICS, RateLimitAction.SEARCH])
    def test_low_stakes_actions_fail_open(self, action: RateLimitAction) -> None:
        assert get_policy(action).fail_open is True

    @pytest.mark.parametrize(
        "action",
        [
            RateLimitAction.REVIEW,
            RateLimitAction.AUTH,
            RateLimitAction.UPLOAD,
            RateLimitAction.PUBLIC_SUBMIT,
        ],
    )
    def test_writes_fail_closed(self, action: RateLimitAction) -> None:
        assert get_policy(action).fail_open is False

    def test_unknown_action_raises(self) -> None:
        with pytest.raises(ValueError):
            get_policy("bulk-delete")


class TestBuildRateLimitKey:
    def test_uses_first_forwarded_hop(self) -> None:
        headers = {"X-Forwarded-For": "203.0.113.7, 10.0.0.1", "X-Real-IP": "10.0.0.2"}
        assert build_rate_limit_key("review", headers, "127.0.0.1") == "review:203.0.113.7"

    def test_falls_back_to_real_ip(self) -> None:
        assert build_rate_limit_key("search", {"x-real-ip": "198.51.100.4"}) == "search:198.51.100.4"

    def test_falls_back_to_client_host(self) -> None:
        assert build_rate_limit_key("search", {}, "192.0.2.10") == "search:192.0.2.10"

    def test_blank_forwarded_header_is_ignored(self) -> None:
        assert build_rate_limit_key("auth", {"x-forwarded-for": " "}, "192.0.2.10") == "auth:192.0.2.10"

    def test_anonymous_when_nothing_known(self) -> None:
        assert build_rate_limit_key("upload", {}, None) == "upload:anonymous"
