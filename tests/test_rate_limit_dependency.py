"""Tests for the per-action rate limit dependency wired into the routes."""

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

from profind.adapters.rate_limit.base import AbstractRateLimiter
from profind.core.app_factory import create_app

REVIEW = {
    "provider_id": "p-1",
    "reviewer_name": "Asha",
    "reviewer_phone": "600-1234",
    "rating": 5,
}

SEARCH = {
    "records": [
        {
            "id": "p-1",
            "name": "Kitty Plumbing",
            "trades": ["plumber"],
            "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc).isoformat(),
        }
    ],
    "filters": {},
}


def _broken_limiter() -> AbstractRateLimiter:
    limiter = MagicMock(spec=AbstractRateLimiter)
    limiter.check.side_effect = RuntimeError("store unavailable")
    return limiter


def test_review_submissions_throttled_after_five(client: TestClient) -> None:
    for _ in range(5):
        assert client.post("/v1/reviews", json=REVIEW).status_code == 200

    resp = client.post("/v1/reviews", json=REVIEW)

    assert resp.status_code == 429
    body = resp.json()
    assert body["error"]["code"] == "rate_limit_exceeded"
    assert resp.headers["Retry-After"] == "600"
    assert resp.headers["X-RateLimit-Limit"] == "5"
    assert resp.headers["X-RateLimit-Remaining"] == "0"
    # window opened at t=1000s and lasts 600s
    assert resp.headers["X-RateLimit-Reset"] == "1600"


def test_limits_are_per_client_address(client: TestClient) -> None:
    for _ in range(5):
        client.post("/v1/reviews", json=REVIEW, headers={"X-Forwarded-For": "203.0.113.1"})

    blocked = client.post("/v1/reviews", json=REVIEW, headers={"X-Forwarded-For": "203.0.113.1"})
    other = client.post("/v1/reviews", json=REVIEW, headers={"X-Forwarded-For": "203.0.113.2"})

    assert blocked.status_code == 429
    assert other.status_code == 200


def test_actions_have_separate_budgets(client: TestClient) -> None:
    for _ in range(6):
        client.post("/v1/reviews", json=REVIEW)

    assert client.post("/v1/search", json=SEARCH).status_code == 200


def test_search_log_throttles_silently(client: TestClient) -> None:
    event = {"query": "leak", "trade": "plumber", "results_count": 2}

    responses = [client.post("/v1/search-log", json=event) for _ in range(65)]

    assert all(r.status_code == 200 for r in responses)
    assert all(r.json() == {"success": True} for r in responses)


def test_search_fails_open_when_limiter_breaks() -> None:
    client = TestClient(create_app(rate_limiter=_broken_limiter()))

    resp = client.post("/v1/search", json=SEARCH)

    assert resp.status_code == 200
    assert resp.json()["count"] == 1


def test_reviews_fail_closed_when_limiter_breaks() -> None:
    client = TestClient(create_app(rate_limiter=_broken_limiter()))

    resp = client.post("/v1/reviews", json=REVIEW)

    assert resp.status_code == 429
    assert resp.json()["error"]["code"] == "rate_limit_unavailable"
    assert "Retry-After" not in resp.headers
    assert "X-RateLimit-Limit" not in resp.headers


def test_disabled_rate_limiting_skips_limiter() -> None:
    limiter = MagicMock(spec=AbstractRateLimiter)
    client = TestClient(create_app(rate_limiter=limiter))

    with patch("profind.core.rate_limit.settings") as mock_settings:
        mock_settings.app.rate_limit_enabled = False
        resp = client.post("/v1/reviews", json=REVIEW)

    assert resp.status_code == 200
    limiter.check.assert_not_called()
