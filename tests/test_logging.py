"""
tests.test_logging

Log context binding for resolution events.
"""

from __future__ import annotations

import structlog

from navaccess.observability.logging import bind_access_context


def test_bind_access_context_binds_only_given_fields() -> None:
    structlog.contextvars.clear_contextvars()
    try:
        bind_access_context(registry="shop")
        assert structlog.contextvars.get_contextvars() == {"registry": "shop"}

        bind_access_context(principal=("tenant", 7), role="admin")
        assert structlog.contextvars.get_contextvars() == {
            "registry": "shop",
            "principal": "('tenant', 7)",
            "principal_role": "admin",
        }
    finally:
        structlog.contextvars.clear_contextvars()


def test_bind_access_context_without_fields_is_a_noop() -> None:
    structlog.contextvars.clear_contextvars()
    bind_access_context()

    assert structlog.contextvars.get_contextvars() == {}
