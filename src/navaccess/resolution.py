"""
navaccess.resolution

Aggregated resolution results.

Responsibilities:
- `Maps`: merged allowed/denied paths and navigation forest for one principal.
- `Auths`: merged anonymous rules, optionally folded together with one `Maps`.
- Order-preserving path unions shared by rules, nodes and results.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from navaccess.navigation import NavigationNode
    from navaccess.rules import Authorization, RoleRule


def union_paths(*groups: Iterable[str]) -> tuple[str, ...]:
    """
    Concatenate path groups and drop repeats, keeping the first occurrence.
    """

    return tuple(dict.fromkeys(p for group in groups for p in group))


def _matches(path: str, prefixes: Iterable[str]) -> bool:
    return any(path.startswith(prefix) for prefix in prefixes)


class _PathQueries:
    __slots__ = ()

    allowed: tuple[str, ...]
    denied: tuple[str, ...]

    def permits(self, path: str) -> bool:
        """
        True when `path` sits under an allowed prefix and under no denied one.

        Denial wins. This only answers the question; callers enforce.
        """

        return _matches(path, self.allowed) and not _matches(path, self.denied)

    def to_dict(self) -> dict[str, list[str]]:
        return {"allowed": list(self.allowed), "denied": list(self.denied)}


@dataclass(frozen=True, slots=True)
class Maps(_PathQueries):
    allowed: tuple[str, ...] = ()
    denied: tuple[str, ...] = ()
    navigation: tuple[NavigationNode, ...] = ()

    @classmethod
    def build(cls, rules: Iterable[RoleRule]) -> Maps:
        # Rules whose roles do not match the principal contribute nothing.
        matched = [r for r in rules if r.is_allowed()]
        return cls(
            allowed=union_paths(*(r.allowed for r in matched)),
            denied=union_paths(*(r.denied for r in matched)),
            # Modules are concatenated as independent trees, never merged by name.
            navigation=tuple(node for r in matched for node in r.module_forest),
        )


@dataclass(frozen=True, slots=True)
class Auths(_PathQueries):
    allowed: tuple[str, ...] = ()
    denied: tuple[str, ...] = ()

    @classmethod
    def build(cls, authorizations: Sequence[Authorization], maps: Maps | None = None) -> Auths:
        allowed = [a.allowed for a in authorizations]
        denied = [a.denied for a in authorizations]
        if maps is not None:
            allowed.append(maps.allowed)
            denied.append(maps.denied)
        return cls(allowed=union_paths(*allowed), denied=union_paths(*denied))


# --- Module Notes -----------------------------------------------------------
# Both results are frozen once built; the registry caches them for the process
# lifetime and hands the same instance to every caller.
