"""
navaccess.observability.logging

Structured logging for the resolver.

Responsibilities:
- Configure `structlog` from `Settings` (console output in dev, JSON elsewhere).
- Bind registry / principal context so resolution events say who they were for.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Hashable
from typing import Any

import structlog

from navaccess.settings import Settings


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
    )

    renderer: Any = (
        structlog.dev.ConsoleRenderer()
        if settings.env == "dev"
        else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service_name(settings.service_name),
            structlog.processors.dict_tracebacks,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _add_service_name(service_name: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def bind_access_context(
    *,
    registry: str | None = None,
    principal: Hashable | None = None,
    role: str | None = None,
) -> None:
    """
    Attach registry / principal fields to every log line of the current context.

    Only the fields that are given are bound; identities are logged as strings.
    """

    fields: dict[str, Any] = {}
    if registry is not None:
        fields["registry"] = registry
    if principal is not None:
        fields["principal"] = str(principal)
    if role is not None:
        fields["principal_role"] = role
    if fields:
        structlog.contextvars.bind_contextvars(**fields)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# The registry logs through `get_logger` at import time; until `configure_logging`
# runs, structlog's default console renderer is used.
