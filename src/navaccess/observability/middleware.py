"""
navaccess.observability.middleware

Request-scoped logging context for the access API.

Responsibilities:
- Generate/propagate request ids.
- Bind the serving registry's name so every resolution event is attributable.
"""

from __future__ import annotations

import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from navaccess.observability.logging import bind_access_context, get_logger

log = get_logger(__name__)


class AccessContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id, path=request.url.path)
        registry = getattr(request.app.state, "registry", None)
        bind_access_context(registry=getattr(registry, "name", None))
        try:
            response: Response = await call_next(request)
            log.debug("access_request_served", status=response.status_code)
        finally:
            structlog.contextvars.clear_contextvars()

        response.headers["x-request-id"] = request_id
        return response


# --- Module Notes -----------------------------------------------------------
# Principal fields are bound later, by the access router, once a principal is known.
