"""Pytest configuration and fixtures shared across all test modules.

Environment variables must be set before anything imports
``profind.core.config``, because settings are built at import time.
"""

import os

os.environ["APP_ENV"] = "testing"

os.environ.setdefault("APP_RATE_LIMIT_ENABLED", "true")
os.environ.setdefault("APP_ADMIN_EMAILS", "admin@profind.test,ops@profind.test")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import datetime, timezone  # noqa: E402
from unittest.mock import Mock  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from profind.adapters.rate_limit.in_memory import InMemoryRateLimiter  # noqa: E402
from profind.core.app_factory import create_app  # noqa: E402
from profind.schemas.provider import ProviderRecord  # noqa: E402


@pytest.fixture
def clock() -> Mock:
    """Controllable time source (UNIX seconds) for rate limiter tests."""
    return Mock(return_value=1_000.0)


@pytest.fixture
def limiter(clock: Mock) -> InMemoryRateLimiter:
    return InMemoryRateLimiter(clock=clock)


@pytest.fixture
def client(limiter: InMemoryRateLimiter) -> TestClient:
    """Test client for an app with its own limiter and a fixed clock."""
    return TestClient(create_app(rate_limiter=limiter))


@pytest.fixture
def make_record():
    """Factory for ProviderRecord with sensible defaults."""

    def _make(**overrides) -> ProviderRecord:
        data = {
            "id": "p-1",
            "name": "Provider",
            "trades": ["plumber"],
            "areas": ["gt-kitty"],
            "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        }
        data.update(overrides)
        return ProviderRecord(**data)

    return _make
