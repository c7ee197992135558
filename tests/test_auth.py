"""Unit tests for the admin email allowlist."""

import asyncio
from unittest.mock import patch

import pytest
from fastapi import HTTPException

from profind.core.auth import is_admin_email, parse_email_allowlist, require_admin, validate_admin
from profind.core.errors import AuthorizationAppError


class TestParseEmailAllowlist:
    def test_single(self) -> None:
        assert parse_email_allowlist("admin@profind.test") == {"admin@profind.test"}

    def test_normalises_case_and_whitespace(self) -> None:
        assert parse_email_allowlist(" Admin@ProFind.test ,ops@profind.test") == {
            "admin@profind.test",
            "ops@profind.test",
        }

    @pytest.mark.parametrize("raw", [None, "", " , ,"])
    def test_empty(self, raw) -> None:
        assert parse_email_allowlist(raw) == set()


class TestIsAdminEmail:
    def test_allowlisted(self) -> None:
        assert is_admin_email("ADMIN@profind.test ")

    def test_not_allowlisted(self) -> None:
        assert not is_admin_email("someone@example.com")

    def test_missing(self) -> None:
        assert not is_admin_email(None)
        assert not is_admin_email("")


class TestValidateAdmin:
    @patch("profind.core.auth.settings")
    def test_raises_when_allowlist_not_configured(self, mock_settings) -> None:
        mock_settings.app.admin_emails = None

        with pytest.raises(AuthorizationAppError) as exc_info:
            validate_admin("admin@profind.test")

        assert exc_info.value.code == "admin_allowlist_not_configured"

    def test_raises_for_non_admin(self) -> None:
        with pytest.raises(AuthorizationAppError) as exc_info:
            validate_admin("someone@example.com")
        assert exc_info.value.code == "admin_required"


class TestRequireAdmin:
    def test_missing_header_is_401(self) -> None:
        with pytest.raises(HTTPException) as exc_info:
            asyncio.run(require_admin(None))
        assert exc_info.value.status_code == 401

    def test_non_admin_is_403(self) -> None:
        with pytest.raises(HTTPException) as exc_info:
            asyncio.run(require_admin("someone@example.com"))
        assert exc_info.value.status_code == 403

    def test_admin_passes(self) -> None:
        assert asyncio.run(require_admin("Ops@ProFind.test")) == "ops@profind.test"
