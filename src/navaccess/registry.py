"""
navaccess.registry

Role registry: rule registration, per-principal resolution, result cache.

Responsibilities:
- Validate and store role registrations at configuration time.
- Resolve a principal into a cached `Maps`.
- Build the registry-wide `Auths` once and hand it out afterwards.

One registry guards one application. Build it at startup, register every rule,
then share it with the request pipeline. Resolutions are cached for the
lifetime of the registry and never invalidated: a principal whose role changes
keeps its first result until a new registry is built.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Hashable, Iterable
from typing import Any, TypeVar

from navaccess.observability.logging import get_logger
from navaccess.principal import Principal, ensure_principal
from navaccess.resolution import Auths, Maps
from navaccess.roles import ANY, validate_roles
from navaccess.rules import Authorization, RuleTemplate

log = get_logger(__name__)

B = TypeVar("B", bound=Callable[..., Any])


class AccessRegistry:
    def __init__(self, name: str = "default") -> None:
        self.name = name
        self._roles: list[str] = []
        self._templates: list[RuleTemplate] = []
        self._authorizations: list[Authorization] = []

        self._maps_cache: dict[Hashable, Maps] = {}
        self._auths: Auths | None = None
        self._auths_lock = threading.Lock()

    def register(self, roles: Iterable[Any], builder: Callable[..., Any]) -> None:
        """
        Install one rule for `roles`.

        `roles == {"any"}` builds an `Authorization` right away by calling
        `builder(authorization)`. Any other role set is stored and evaluated
        per principal as `builder(role_rule, principal)`.
        """

        tokens = validate_roles(roles)
        if tokens == (ANY,):
            self._authorizations.append(Authorization(builder))
        else:
            self._roles.extend(tokens)
            self._templates.append(RuleTemplate(roles=tokens, builder=builder))
        log.info("access_rule_registered", registry=self.name, roles=list(tokens))

    def roles_for(self, *roles: Any) -> Callable[[B], B]:
        """
        Decorator form of `register`:

            @registry.roles_for("admin")
            def admin(role, account):
                role.allow("/")
        """

        def decorator(builder: B) -> B:
            self.register(roles, builder)
            return builder

        return decorator

    def known_roles(self) -> frozenset[str]:
        return frozenset(self._roles)

    def resolve(self, principal: Principal) -> Maps:
        identity, role = ensure_principal(principal)

        cached = self._maps_cache.get(identity)
        if cached is not None:
            return cached

        maps = Maps.build(t.evaluate(principal) for t in self._templates)
        log.debug(
            "access_maps_built",
            registry=self.name,
            role=role,
            allowed=len(maps.allowed),
            denied=len(maps.denied),
            modules=len(maps.navigation),
        )
        # Racing misses for one identity build equal results; the first stored one wins.
        return self._maps_cache.setdefault(identity, maps)

    def anonymous_resolution(self, principal: Principal | None = None) -> Auths:
        """
        Merged `any` rules, plus the principal's own maps on the very first call.

        The first call decides the cached result; the argument of every later
        call is ignored.
        """

        if self._auths is not None:
            return self._auths

        with self._auths_lock:
            if self._auths is None:
                maps = self.resolve(principal) if principal is not None else None
                self._auths = Auths.build(self._authorizations, maps)
                log.info(
                    "access_auths_built",
                    registry=self.name,
                    with_principal=maps is not None,
                    allowed=len(self._auths.allowed),
                    denied=len(self._auths.denied),
                )
            return self._auths


# --- Module Notes -----------------------------------------------------------
# Registration is expected to finish before the first resolution; the rule lists
# themselves are not guarded against concurrent mutation.
