from __future__ import annotations

from profind.api.routes.admin import router as admin_router
from profind.api.routes.health import router as health_router
from profind.api.routes.plans import router as plans_router
from profind.api.routes.reviews import router as reviews_router
from profind.api.routes.search import router as search_router

__all__ = [
    "admin_router",
    "health_router",
    "plans_router",
    "reviews_router",
    "search_router",
]
