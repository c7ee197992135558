"""OpenAPI metadata and customization utilities.

Enriches the generated OpenAPI schema with:
- Tags metadata
- The ``X-User-Email`` header scheme, required only on admin paths

This keeps documentation concerns decoupled from the app factory.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

_TAGS = [
    {"name": "Search", "description": "Provider search, quote matching and search analytics."},
    {"name": "Reviews", "description": "Review submission and rating aggregation."},
    {"name": "Plans", "description": "Plan tiers and boosted slot limits."},
    {"name": "Admin", "description": "Back-office diagnostics; admin email allowlist."},
    {"name": "Health", "description": "Liveness checks."},
]


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch FastAPI's OpenAPI generation to add tags and the admin scheme."""

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        schema = original_openapi()

        components = schema.setdefault("components", {})
        security_schemes = components.setdefault("securitySchemes", {})
        security_schemes.setdefault(
            "AdminEmail",
            {
                "type": "apiKey",
                "in": "header",
                "name": "X-User-Email",
                "description": "Email of the signed-in user, forwarded by the gateway.",
            },
        )

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        for tag in _TAGS:
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        for path, methods in schema.get("paths", {}).items():
            if "/admin/" not in path:
                continue
            for method_obj in methods.values():
                if isinstance(method_obj, dict):
                    method_obj["security"] = [{"AdminEmail": []}]

        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
