"""
navaccess.api.app

FastAPI app factory exposing an `AccessRegistry` read-only.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Attach the registry (and optional display-name resolver) to `app.state`.
"""

from __future__ import annotations

from fastapi import FastAPI

from navaccess import __version__
from navaccess.api.routers.access import router as access_router
from navaccess.api.routers.health import router as health_router
from navaccess.navigation import DisplayNameResolver
from navaccess.observability.logging import configure_logging, get_logger
from navaccess.observability.middleware import AccessContextMiddleware
from navaccess.registry import AccessRegistry
from navaccess.settings import Settings

log = get_logger(__name__)


def create_app(
    *,
    settings: Settings,
    registry: AccessRegistry,
    display_name_resolver: DisplayNameResolver | None = None,
) -> FastAPI:
    configure_logging(settings)

    app = FastAPI(
        title="Navigation Access Resolver",
        version=__version__,
        docs_url="/docs" if settings.env != "prod" else None,
        openapi_url="/openapi.json",
    )
    # The registry is fully configured by now; requests only read from it.
    app.state.settings = settings
    app.state.registry = registry
    app.state.display_name_resolver = display_name_resolver

    app.add_middleware(AccessContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(access_router)

    log.info(
        "app_created",
        env=settings.env,
        registry=registry.name,
        roles=sorted(registry.known_roles()),
    )
    return app


# --- Module Notes -----------------------------------------------------------
# Mount this app under the host application, or reuse `access_router` directly.
