"""
navaccess.navigation

Navigation tree shared by menus and permissions.

Responsibilities:
- `NavigationNode`: one module/menu/sub-menu entry with an optional path.
- Flatten a subtree into the path prefixes it grants.
- Derive stable menu ids and display names from node names.

A node's path is granted simply by declaring the node, so a menu can never
point somewhere its role cannot reach.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from enum import Enum
from typing import Any

from navaccess.resolution import union_paths

DEFAULT_NAMESPACE = "admin.menus"

# (lookup_key, default) -> display string
DisplayNameResolver = Callable[[str, str], str]

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


class MenuKey(str):
    """
    Symbolic node name. Rendered through a display-name resolver instead of
    being shown verbatim.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"MenuKey({str.__repr__(self)})"


NodeName = str | MenuKey | Enum
NodeBuilder = Callable[["NavigationNode"], Any]


def humanize(raw: str) -> str:
    text = raw.replace("_", " ").strip()
    return text[:1].upper() + text[1:]


def stable_id(name: Any, sep: str = "-") -> str:
    raw = name.value if isinstance(name, Enum) else name
    return _NON_ALNUM.sub(sep, str(raw).lower()).strip(sep)


class NavigationNode:
    __slots__ = ("name", "path", "children")

    def __init__(
        self,
        name: NodeName,
        path: str | None = None,
        builder: NodeBuilder | None = None,
    ) -> None:
        self.name = name
        self.path = path
        self.children: list[NavigationNode] = []
        if builder is not None:
            builder(self)

    def __repr__(self) -> str:
        return f"NavigationNode({self.name!r}, path={self.path!r}, children={len(self.children)})"

    def add_child(
        self,
        name: NodeName,
        path: str | None = None,
        builder: NodeBuilder | None = None,
    ) -> NavigationNode:
        child = NavigationNode(name, path, builder)
        self.children.append(child)
        return child

    # Module level reads `module.menu(...)`, menu level reads `menu.add(...)`.
    menu = add_child
    add = add_child

    @property
    def is_symbolic(self) -> bool:
        return isinstance(self.name, (MenuKey, Enum))

    @property
    def raw_name(self) -> str:
        return str(self.name.value) if isinstance(self.name, Enum) else str(self.name)

    def walk(self) -> Iterator[NavigationNode]:
        yield self
        for child in self.children:
            yield from child.walk()

    def contributed_paths(self) -> tuple[str, ...]:
        """
        This node's path followed by every descendant path, first occurrence wins.
        """

        return union_paths(node.path for node in self.walk() if node.path is not None)

    def lookup_key(self, namespace: str = DEFAULT_NAMESPACE) -> str:
        return f"{namespace}.{self.raw_name}" if namespace else self.raw_name

    def display_name(
        self,
        resolver: DisplayNameResolver | None = None,
        namespace: str = DEFAULT_NAMESPACE,
    ) -> str:
        if not self.is_symbolic:
            return self.raw_name
        default = humanize(self.raw_name)
        if resolver is None:
            return default
        return resolver(self.lookup_key(namespace), default)

    def stable_id(self, sep: str = "-") -> str:
        return stable_id(self.name, sep)

    def to_dict(
        self,
        resolver: DisplayNameResolver | None = None,
        namespace: str = DEFAULT_NAMESPACE,
        sep: str = "-",
    ) -> dict[str, Any]:
        return {
            "id": self.stable_id(sep),
            "name": self.display_name(resolver, namespace),
            "path": self.path,
            "children": [c.to_dict(resolver, namespace, sep) for c in self.children],
        }


# --- Module Notes -----------------------------------------------------------
# `to_dict` is the hand-off point for UI-config renderers; concrete menu formats
# are built by the host from this shape.
