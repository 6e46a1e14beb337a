"""
navaccess.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Expose the registry and display-name resolver stashed on `app.state`.
- Provide the `get_principal` hook the host's authentication layer fills in.
"""

from __future__ import annotations

from fastapi import Request

from navaccess.navigation import DisplayNameResolver
from navaccess.principal import Principal
from navaccess.registry import AccessRegistry
from navaccess.settings import Settings, get_settings


def settings_dep(request: Request) -> Settings:
    # Apps built by `create_app` carry their own settings; fall back to the env.
    return getattr(request.app.state, "settings", None) or get_settings()


def registry_from_app(request: Request) -> AccessRegistry:
    # Set once in `navaccess.api.app.create_app`.
    return request.app.state.registry  # type: ignore[attr-defined]


def display_name_resolver_from_app(request: Request) -> DisplayNameResolver | None:
    return getattr(request.app.state, "display_name_resolver", None)


def get_principal(request: Request) -> Principal | None:
    """
    Principal placed on `request.state.principal` by the host's auth middleware.

    Hosts with a different auth scheme override this dependency through
    `app.dependency_overrides`.
    """

    return getattr(request.state, "principal", None)


# --- Module Notes -----------------------------------------------------------
# Authentication is the host's job; this module only reads what it left behind.
