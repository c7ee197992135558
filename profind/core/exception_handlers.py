"""Global exception handlers for consistent error responses.

Design:
- AppError subclasses → 400 / 403 / 429
- Unexpected Exception → generic 500 (safety net)
- All responses include request_id for tracing
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from profind.core.config import settings
from profind.core.errors import (
    AppError,
    AuthorizationAppError,
    RateLimitAppError,
)
from profind.core.logging import get_request_id

logger = logging.getLogger(__name__)


def _status_for(exc: AppError) -> int:
    if isinstance(exc, AuthorizationAppError):
        return 403
    if isinstance(exc, RateLimitAppError):
        return 429
    return 400


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle domain application errors with a consistent JSON body.

    Args:
        request: FastAPI request object.
        exc: AppError instance (or subclass).

    Returns:
        JSONResponse shaped as ``{"error": {code, message, request_id, details?}}``.
    """
    status_code = _status_for(exc)

    logger.warning(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "error_message": exc.message,
            "status_code": status_code,
            "has_details": bool(exc.details),
            "route": request.url.path,
        },
    )

    error_content = {
        "code": exc.code,
        "message": exc.message,
        "request_id": get_request_id(),
    }
    if exc.details:
        error_content["details"] = exc.details

    headers: dict[str, str] | None = None
    # Only a throttled request has a window to report; limiter failures do not
    if (
        isinstance(exc, RateLimitAppError)
        and exc.details
        and "retry_after" in exc.details
        and settings.app.rate_limit_include_headers
    ):
        headers = {
            "Retry-After": str(exc.details["retry_after"]),
            "X-RateLimit-Limit": str(exc.details.get("max_value", 0)),
            "X-RateLimit-Remaining": "0",
        }
        if "reset_at" in exc.details:
            headers["X-RateLimit-Reset"] = str(exc.details["reset_at"])

    return JSONResponse(
        status_code=status_code,
        content={"error": error_content},
        headers=headers,
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors.

    Logs the failure server-side and returns a generic message; no stack
    traces or exception text reach the client.
    """
    logger.error(
        "unhandled_exception",
        extra={
            "error_type": type(exc).__name__,
            "error_msg": str(exc),
            "request_path": request.url.path,
            "request_method": request.method,
        },
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "internal_server_error",
                "message": "An unexpected error occurred. Please try again later.",
                "request_id": get_request_id(),
            }
        },
    )


def setup_exception_handlers(app) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(Exception)(general_exception_handler)
