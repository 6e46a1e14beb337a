"""
navaccess.rules

Rule builders handed to registration callbacks.

Responsibilities:
- `RoleRule`: evaluated once per principal; builds modules and allow/deny lists.
- `Authorization`: the `any` rule, built once at registration with no principal.
- `RuleTemplate`: the deferred `(roles, builder)` record the registry stores.
"""

from __future__ import annotations

import copy
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from navaccess.navigation import NavigationNode, NodeBuilder, NodeName
from navaccess.principal import Principal
from navaccess.resolution import union_paths
from navaccess.roles import principal_role

RoleBuilder = Callable[["RoleRule", Any], Any]
AuthorizationBuilder = Callable[["Authorization"], Any]


class Authorization:
    """
    Flat allow / require-login lists that apply to every caller.
    """

    def __init__(self, builder: AuthorizationBuilder | None = None) -> None:
        self._allowed: list[str] = []
        self._denied: list[str] = []
        if builder is not None:
            builder(self)

    @property
    def allowed(self) -> tuple[str, ...]:
        return tuple(self._allowed)

    @property
    def denied(self) -> tuple[str, ...]:
        return tuple(self._denied)

    def allow(self, path: str) -> None:
        if path not in self._allowed:
            self._allowed.append(path)

    def require_login(self, path: str) -> None:
        if path not in self._denied:
            self._denied.append(path)

    deny = require_login


class RoleRule:
    """
    One role registration evaluated against one principal.

    The builder receives this rule and a snapshot of the principal, so it can
    shape modules per account (e.g. one menu entry per owned category).
    """

    def __init__(self, principal: Principal, roles: tuple[str, ...], builder: RoleBuilder) -> None:
        self.roles = roles
        self.module_forest: list[NavigationNode] = []
        self._allowed: list[str] = []
        self._denied: list[str] = []
        # Later mutation of the caller's object must not leak into this evaluation.
        self.principal = copy.copy(principal)
        builder(self, self.principal)

    def add_module(
        self,
        name: NodeName,
        path: str | None = None,
        builder: NodeBuilder | None = None,
    ) -> NavigationNode:
        module = NavigationNode(name, path, builder)
        self.module_forest.append(module)
        return module

    project_module = add_module

    def allow(self, path: str) -> None:
        if path not in self._allowed:
            self._allowed.append(path)

    def deny(self, path: str) -> None:
        # Deduplicates against denied paths only; a path may be both allowed and denied.
        if path not in self._denied:
            self._denied.append(path)

    def is_allowed(self) -> bool:
        return principal_role(self.principal.role) in self.roles

    @property
    def allowed(self) -> tuple[str, ...]:
        return union_paths(self._allowed, *(m.contributed_paths() for m in self.module_forest))

    @property
    def denied(self) -> tuple[str, ...]:
        return tuple(self._denied)


@dataclass(frozen=True, slots=True)
class RuleTemplate:
    roles: tuple[str, ...]
    builder: RoleBuilder

    def evaluate(self, principal: Principal) -> RoleRule:
        return RoleRule(principal, self.roles, self.builder)


# --- Module Notes -----------------------------------------------------------
# Builders run synchronously; nested `add_module(..., builder)` / `menu(...)`
# callbacks complete before the enclosing call returns.
