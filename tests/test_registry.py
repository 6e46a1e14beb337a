"""
tests.test_registry

Registry behaviour: registration validation, resolution, caching.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from enum import Enum

import pytest

from navaccess.errors import (
    AccessControlError,
    ConflictingRoleError,
    InvalidPrincipalError,
    InvalidRoleError,
)
from navaccess.navigation import MenuKey, NavigationNode
from navaccess.principal import Account
from navaccess.registry import AccessRegistry
from navaccess.rules import Authorization, RoleRule


class Role(str, Enum):
    ADMIN = "admin"
    EDITOR = "editor"


def _noop(*_: object) -> None:
    return None


@pytest.fixture()
def registry() -> AccessRegistry:
    return AccessRegistry(name="admin")


# Registration -----------------------------------------------------------------


@pytest.mark.parametrize("roles", [[], [""], ["not a role"], [42], [None]])
def test_register_rejects_invalid_roles(registry: AccessRegistry, roles: list) -> None:
    with pytest.raises(InvalidRoleError):
        registry.register(roles, _noop)


def test_register_rejects_any_mixed_with_roles(registry: AccessRegistry) -> None:
    with pytest.raises(ConflictingRoleError):
        registry.register(["admin", "any"], _noop)

    assert registry.known_roles() == frozenset()


def test_known_roles_is_union_without_any(registry: AccessRegistry) -> None:
    registry.register(["any"], _noop)
    registry.register(["admin", "editor"], _noop)
    registry.register([Role.ADMIN], _noop)
    registry.register(["Auditor"], _noop)

    assert registry.known_roles() == frozenset({"admin", "editor", "auditor"})


def test_any_rule_is_built_at_registration(registry: AccessRegistry) -> None:
    calls: list[Authorization] = []
    registry.register(["any"], calls.append)

    assert len(calls) == 1
    assert isinstance(calls[0], Authorization)


def test_role_rule_is_deferred_until_resolution(registry: AccessRegistry) -> None:
    calls: list[tuple[RoleRule, Account]] = []
    registry.register(["admin"], lambda role, account: calls.append((role, account)))

    assert calls == []
    registry.resolve(Account(id="1", role="admin"))
    assert len(calls) == 1
    assert calls[0][1] == Account(id="1", role="admin")


def test_roles_for_decorator_registers_and_returns_builder(registry: AccessRegistry) -> None:
    @registry.roles_for("admin")
    def admin(role: RoleRule, account: Account) -> None:
        role.allow("/")

    assert callable(admin)
    assert registry.resolve(Account(id="1", role="admin")).allowed == ("/",)


def test_errors_share_documented_base() -> None:
    for error in (InvalidRoleError, ConflictingRoleError, InvalidPrincipalError):
        assert issubclass(error, AccessControlError)
        assert error.__doc__
    assert AccessControlError.__doc__


# Resolution -------------------------------------------------------------------


def test_admin_allow_is_resolved_per_role(registry: AccessRegistry) -> None:
    registry.register(["admin"], lambda role, account: role.allow("/accounts"))

    assert "/accounts" in registry.resolve(Account(id="1", role="admin")).allowed
    assert registry.resolve(Account(id="2", role="editor")).allowed == ()


def test_unregistered_role_resolves_to_nothing(registry: AccessRegistry) -> None:
    def admin(role: RoleRule, account: Account) -> None:
        role.allow("/")
        role.deny("/posts")

    registry.register(["admin"], admin)
    registry.register(["editor"], lambda role, account: role.allow("/posts"))

    maps = registry.resolve(Account(id="3", role="guest"))

    assert maps.allowed == ()
    assert maps.denied == ()
    assert maps.navigation == ()


def test_nested_modules_grant_paths_and_build_navigation(registry: AccessRegistry) -> None:
    def accounts(menu: NavigationNode) -> None:
        menu.add(MenuKey("new"), "/accounts/new")

    def admin(role: RoleRule, account: Account) -> None:
        role.add_module(MenuKey("settings"), builder=lambda m: m.menu(MenuKey("accounts"), "/accounts", accounts))

    registry.register(["admin"], admin)
    maps = registry.resolve(Account(id="1", role="admin"))

    assert {"/accounts", "/accounts/new"} <= set(maps.allowed)
    assert len(maps.navigation) == 1
    settings = maps.navigation[0]
    assert settings.name == "settings"
    assert [c.name for c in settings.children] == ["accounts"]
    assert len(settings.children[0].children) == 1


def test_matching_rules_are_merged_in_registration_order(registry: AccessRegistry) -> None:
    def first(role: RoleRule, account: Account) -> None:
        role.add_module("Posts", "/posts")
        role.deny("/posts/secret")

    def second(role: RoleRule, account: Account) -> None:
        role.add_module("Posts", "/posts")
        role.allow("/media")
        role.deny("/posts/secret")

    registry.register(["editor"], first)
    registry.register(["admin"], lambda role, account: role.allow("/admin"))
    registry.register(["editor", "admin"], second)

    maps = registry.resolve(Account(id="1", role="editor"))

    assert maps.allowed == ("/posts", "/media")
    assert maps.denied == ("/posts/secret",)
    # Same-named modules stay separate trees.
    assert [m.name for m in maps.navigation] == ["Posts", "Posts"]


def test_builder_can_shape_modules_per_principal(registry: AccessRegistry) -> None:
    categories = {"1": ["news"], "2": ["news", "sport"]}

    def admin(role: RoleRule, account: Account) -> None:
        def build(module: NavigationNode) -> None:
            for name in categories[account.id]:
                module.menu(name, f"/categories/{name}")

        role.add_module(MenuKey("categories"), builder=build)

    registry.register([Role.ADMIN], admin)

    assert registry.resolve(Account(id="1", role="admin")).allowed == ("/categories/news",)
    assert registry.resolve(Account(id="2", role="admin")).allowed == (
        "/categories/news",
        "/categories/sport",
    )


def test_resolve_is_cached_by_identity(registry: AccessRegistry) -> None:
    registry.register(["admin"], lambda role, account: role.allow("/accounts"))

    first = registry.resolve(Account(id="1", role="admin"))
    # Same identity, different role: the cached result wins.
    second = registry.resolve(Account(id="1", role="editor"))

    assert second is first
    assert second.allowed == ("/accounts",)


def test_concurrent_resolve_for_new_identity_agrees(registry: AccessRegistry) -> None:
    barrier = threading.Barrier(2, timeout=5)
    builds: list[str] = []

    def admin(role: RoleRule, account: Account) -> None:
        builds.append(account.id)
        # Both threads are inside a cache miss before either can store a result.
        barrier.wait()
        role.allow("/accounts")

    registry.register(["admin"], admin)
    account = Account(id="99", role="admin")

    with ThreadPoolExecutor(max_workers=2) as pool:
        futures = [pool.submit(registry.resolve, account) for _ in range(2)]
        a, b = (f.result() for f in futures)
    c = registry.resolve(account)

    assert len(builds) == 2
    assert a.allowed == b.allowed == c.allowed == ("/accounts",)
    assert a.denied == b.denied == c.denied == ()
    # The duplicate build is discarded; everyone gets the first stored result.
    assert a is b
    assert c is a


@pytest.mark.parametrize("role", ["content-editor", "Super Admin", "", None, 42])
def test_unknown_role_shapes_resolve_to_nothing(registry: AccessRegistry, role: object) -> None:
    registry.register(["admin"], lambda r, account: r.allow("/admin"))
    registry.register(["none"], lambda r, account: r.allow("/none"))

    maps = registry.resolve(Account(id="1", role=role))  # type: ignore[arg-type]

    assert maps.allowed == ()
    assert maps.denied == ()


class _NoRole:
    identity = "x"


class _UnhashableIdentity:
    identity: list[str] = []
    role = "admin"


class _NestedUnhashableIdentity:
    identity = ("tenant", ["a", "b"])
    role = "admin"


class _NullIdentity:
    identity = None
    role = "admin"


@pytest.mark.parametrize(
    "principal",
    [
        None,
        object(),
        "admin",
        _NoRole(),
        _UnhashableIdentity(),
        _NestedUnhashableIdentity(),
        _NullIdentity(),
    ],
)
def test_resolve_rejects_invalid_principals(registry: AccessRegistry, principal: object) -> None:
    with pytest.raises(InvalidPrincipalError):
        registry.resolve(principal)  # type: ignore[arg-type]


# Anonymous resolution -----------------------------------------------------------


def test_anonymous_resolution_collects_any_rules(registry: AccessRegistry) -> None:
    def shop(role: Authorization) -> None:
        role.require_login("/cart")
        role.require_login("/account")
        role.allow("/account/create")

    registry.register(["any"], shop)
    registry.register(["any"], lambda role: role.allow("/sessions"))
    registry.register(["admin"], lambda role, account: role.allow("/admin"))

    auths = registry.anonymous_resolution()

    assert auths.allowed == ("/account/create", "/sessions")
    assert auths.denied == ("/cart", "/account")
    assert "/admin" not in auths.allowed


def test_anonymous_resolution_merges_first_principal_maps(registry: AccessRegistry) -> None:
    registry.register(["any"], lambda role: role.allow("/sessions"))
    registry.register(["admin"], lambda role, account: (role.allow("/"), role.deny("/posts")))

    admin = Account(id="1", role="admin")
    auths = registry.anonymous_resolution(admin)

    assert auths.allowed == ("/sessions", "/")
    assert auths.denied == ("/posts",)
    # The principal's maps were cached along the way.
    assert registry.resolve(admin).allowed == ("/",)


def test_anonymous_resolution_first_call_wins(registry: AccessRegistry) -> None:
    registry.register(["any"], lambda role: role.allow("/sessions"))
    registry.register(["admin"], lambda role, account: role.allow("/admin"))

    first = registry.anonymous_resolution()
    later = registry.anonymous_resolution(Account(id="1", role="admin"))

    assert later is first
    assert later.allowed == ("/sessions",)


def test_anonymous_resolution_rejects_invalid_principal(registry: AccessRegistry) -> None:
    with pytest.raises(InvalidPrincipalError):
        registry.anonymous_resolution(object())  # type: ignore[arg-type]


def test_permits_lets_denial_win(registry: AccessRegistry) -> None:
    def admin(role: RoleRule, account: Account) -> None:
        role.allow("/")
        role.deny("/posts")

    registry.register(["admin"], admin)
    maps = registry.resolve(Account(id="1", role="admin"))

    assert maps.permits("/accounts/1")
    assert not maps.permits("/posts/new")


# --- Module Notes -----------------------------------------------------------
# Each test gets a fresh registry; the cache is never reset in place.
