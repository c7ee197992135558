"""Admin authorization by email allowlist.

User sessions are managed by the hosted auth service; by the time a request
reaches this API the gateway has resolved the session and forwards the
signed-in user's email in ``X-User-Email``. Admin access is granted when
that email is on the configured allowlist.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Annotated

from fastapi import Header, HTTPException, status

from profind.core.config import settings
from profind.core.errors import AuthorizationAppError

logger = logging.getLogger(__name__)


def parse_email_allowlist(emails: str | None) -> set[str]:
    """Parse a comma-separated list of emails into a normalised set.

    Examples:
        >>> sorted(parse_email_allowlist("Ops@Example.com, admin@example.com ,"))
        ['admin@example.com', 'ops@example.com']
        >>> parse_email_allowlist(None)
        set()
    """
    if not emails:
        return set()
    return {e.strip().lower() for e in emails.split(",") if e.strip()}


def is_admin_email(email: str | None) -> bool:
    if not email:
        return False
    return email.strip().lower() in parse_email_allowlist(settings.app.admin_emails)


def _email_hash(email: str) -> str:
    return hashlib.sha256(email.strip().lower().encode()).hexdigest()[:16]


def validate_admin(email: str) -> None:
    """Check that ``email`` belongs to an administrator.

    Raises:
        AuthorizationAppError: If no allowlist is configured or the email
            is not on it.
    """
    if not parse_email_allowlist(settings.app.admin_emails):
        logger.error("admin_check_failed", extra={"reason": "allowlist_not_configured"})
        raise AuthorizationAppError(
            code="admin_allowlist_not_configured",
            message="Admin access is not configured",
            details={"hint": "Set APP_ADMIN_EMAILS to a comma-separated list of emails"},
        )

    if not is_admin_email(email):
        logger.warning(
            "admin_check_failed",
            extra={"reason": "not_admin", "email_hash": _email_hash(email)},
        )
        raise AuthorizationAppError(
            code="admin_required",
            message="Admin access required",
        )


async def require_admin(
    x_user_email: Annotated[str | None, Header(alias="X-User-Email")] = None,
) -> str:
    """FastAPI dependency guarding admin endpoints.

    Returns:
        The normalised admin email.

    Raises:
        HTTPException: 401 without a signed-in user, 403 for non-admins.
    """
    if not x_user_email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    try:
        validate_admin(x_user_email)
    except AuthorizationAppError as exc:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=exc.message,
        ) from exc

    logger.info("admin_check_passed", extra={"email_hash": _email_hash(x_user_email)})
    return x_user_email.strip().lower()
