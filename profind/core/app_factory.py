"""Application factory for the FastAPI app.

Centralizes app construction (metadata, middleware, handlers, routers and
the rate limiter instance) so tests can build isolated apps.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from profind.adapters.rate_limit.base import AbstractRateLimiter
from profind.adapters.rate_limit.in_memory import InMemoryRateLimiter
from profind.api.routes import (
    admin_router,
    health_router,
    plans_router,
    reviews_router,
    search_router,
)
from profind.core.config import settings
from profind.core.exception_handlers import setup_exception_handlers
from profind.core.logging import configure_logging
from profind.core.middleware import request_id_middleware
from profind.core.openapi import apply_openapi_customizations

logger = logging.getLogger(__name__)


def create_app(rate_limiter: AbstractRateLimiter | None = None) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        rate_limiter: Limiter owned by this app; a fresh in-memory limiter
            is created when omitted.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="ProFind Core API",
        description=(
            "Search, ranking, plan tiering and rate limiting for the ProFind "
            "tradespeople directory. Provider records are supplied by the "
            "caller; the service filters, ranks and shapes them."
        ),
        version="0.1.0",
        license_info={
            "name": "MIT License",
            "url": "https://opensource.org/licenses/MIT",
        },
    )

    app.state.rate_limiter = rate_limiter if rate_limiter is not None else InMemoryRateLimiter()

    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(search_router, prefix="/v1")
    app.include_router(reviews_router, prefix="/v1")
    app.include_router(plans_router, prefix="/v1")
    app.include_router(admin_router, prefix="/v1")
    app.include_router(health_router)

    apply_openapi_customizations(app)

    logger.info(
        "app.created",
        extra={"app_env": settings.app_env, "rate_limit_enabled": settings.app.rate_limit_enabled},
    )
    return app
