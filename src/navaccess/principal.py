"""
navaccess.principal

Principal capability consumed by the resolver.

Responsibilities:
- Define the `Principal` protocol (stable identity + role accessor).
- Provide `Account`, a minimal concrete principal for hosts and tests.
- Check principals at the resolver boundary.
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from navaccess.errors import InvalidPrincipalError
from navaccess.roles import principal_role


@runtime_checkable
class Principal(Protocol):
    """
    Anything with a hashable `identity` (the cache key) and a `role`.
    """

    @property
    def identity(self) -> Hashable: ...

    @property
    def role(self) -> Any: ...


@dataclass(frozen=True, slots=True)
class Account:
    id: str
    role: str

    @property
    def identity(self) -> str:
        return self.id


def ensure_principal(principal: object) -> tuple[Hashable, str]:
    """
    Return `(identity, role)` for a conforming principal, role lower-cased.

    Raises InvalidPrincipalError when `identity` or `role` is missing or the
    identity cannot be used as a cache key. A role that matches no rule is not
    an error; it resolves to nothing.
    """

    if not isinstance(principal, Principal):
        raise InvalidPrincipalError(
            f"Principal must expose `identity` and `role`, got {type(principal).__name__}"
        )

    identity = principal.identity
    try:
        hash(identity)
    except TypeError as e:
        raise InvalidPrincipalError(f"Principal identity {identity!r} is not hashable") from e
    if identity is None:
        raise InvalidPrincipalError("Principal identity must not be None")

    return identity, principal_role(principal.role)


# --- Module Notes -----------------------------------------------------------
# Account storage and authentication are owned by the host application; the
# resolver only reads these two attributes.
