"""
navaccess.api.routers.access

Resolution endpoints.

Responsibilities:
- `/v1/access/navigation`: allowed/denied paths and menu tree of the caller.
- `/v1/access/anonymous`: the merged `any` rules.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from starlette.status import HTTP_401_UNAUTHORIZED

from navaccess.api.deps import (
    display_name_resolver_from_app,
    get_principal,
    registry_from_app,
    settings_dep,
)
from navaccess.errors import InvalidPrincipalError
from navaccess.navigation import DisplayNameResolver
from navaccess.observability.logging import bind_access_context
from navaccess.principal import Principal, ensure_principal
from navaccess.registry import AccessRegistry
from navaccess.settings import Settings

router = APIRouter(prefix="/v1/access", tags=["access"])


class NavigationItem(BaseModel):
    id: str
    name: str
    path: str | None = None
    children: list[NavigationItem] = Field(default_factory=list)


class AuthsResponse(BaseModel):
    allowed: list[str]
    denied: list[str]


class NavigationResponse(AuthsResponse):
    navigation: list[NavigationItem]


@router.get("/navigation", response_model=NavigationResponse)
async def navigation(
    principal: Principal | None = Depends(get_principal),
    registry: AccessRegistry = Depends(registry_from_app),
    resolver: DisplayNameResolver | None = Depends(display_name_resolver_from_app),
    settings: Settings = Depends(settings_dep),
) -> dict[str, Any]:
    if principal is None:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Authentication required")
    try:
        identity, role = ensure_principal(principal)
        bind_access_context(principal=identity, role=role)
        maps = registry.resolve(principal)
    except InvalidPrincipalError as e:
        # Fail closed: a malformed principal never gets an empty-but-valid answer.
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=str(e)) from e

    return {
        **maps.to_dict(),
        "navigation": [
            node.to_dict(resolver, settings.menu_namespace, settings.menu_id_separator)
            for node in maps.navigation
        ],
    }


@router.get("/anonymous", response_model=AuthsResponse)
async def anonymous(registry: AccessRegistry = Depends(registry_from_app)) -> dict[str, Any]:
    # Never pass the caller in: the cached Auths is shared by every later caller.
    return registry.anonymous_resolution().to_dict()


# --- Module Notes -----------------------------------------------------------
# `/anonymous` serves only the `any` rules as long as nothing in the host primes
# `anonymous_resolution` with a principal first.
