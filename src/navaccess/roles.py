"""
navaccess.roles

Role identifier helpers.

Responsibilities:
- Validate the role sets passed to the registry.
- Normalize role values (plain strings or str-valued Enum members) for matching.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Any

from navaccess.errors import ConflictingRoleError, InvalidRoleError

# Pseudo-role evaluated for every caller, authenticated or not.
ANY = "any"


def role_token(value: Any) -> str | None:
    """
    Return the lower-cased token for a role value, or None when it is not one.
    """

    if isinstance(value, Enum):
        value = value.value
    if not isinstance(value, str) or not value.isidentifier():
        return None
    return value.lower()


def principal_role(value: Any) -> str:
    """
    Lower-cased role of a principal. Never fails: a role that is not a
    registered identifier simply matches no rule.
    """

    if isinstance(value, Enum):
        value = value.value
    if value is None:
        return ""
    return str(value).lower()


def validate_roles(roles: Iterable[Any]) -> tuple[str, ...]:
    raw = list(roles)
    if not raw:
        raise InvalidRoleError("At least one role must be given")

    tokens: list[str] = []
    for value in raw:
        token = role_token(value)
        if token is None:
            raise InvalidRoleError(f"Role {value!r} must be a non-empty identifier string")
        tokens.append(token)

    if len(tokens) > 1 and ANY in tokens:
        raise ConflictingRoleError(f"You can't merge {ANY!r} with other roles: {tokens}")
    return tuple(tokens)


# --- Module Notes -----------------------------------------------------------
# Registered roles and principal roles go through the same lower-casing so
# `Admin`, `ADMIN` and `admin` all name one role.
