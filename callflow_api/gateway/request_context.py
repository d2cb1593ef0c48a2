# Callflow Editor API - Call-Flow Record Service for Virtual Assistants
# Copyright (c) 2026 George Scott Foley
# ORCID: 0009-0006-4957-0540
# Email: Georgescottfoley@proton.me
# Licensed under the MIT License - see LICENSE file for details

"""
Request Context Middleware

Every request gets an id (taken from X-Request-ID when the caller sends
a usable one), which is put into the logging context, stored on
`request.state` and echoed on the response. Start and completion are
logged with the elapsed time.
"""

import logging
import secrets
import time
from collections.abc import Callable
from contextvars import ContextVar
from dataclasses import dataclass, field

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from ..observability.logging import clear_request_context, set_request_context

logger = logging.getLogger(__name__)

MAX_REQUEST_ID_LENGTH = 64


@dataclass
class RequestContext:
    request_id: str
    method: str
    path: str
    started: float = field(default_factory=time.perf_counter)

    # Filled in by the tenant-aware routes
    environment: str | None = None
    tenant: str | None = None

    @property
    def elapsed_ms(self) -> float:
        return round((time.perf_counter() - self.started) * 1000, 2)


_current: ContextVar[RequestContext | None] = ContextVar("request_context", default=None)


def set_profile_context(environment: str, tenant: str, user: str | None = None) -> None:
    """Record the environment/tenant a request is served from."""
    ctx = _current.get()
    if ctx is not None:
        ctx.environment = environment
        ctx.tenant = tenant
    set_request_context(environment=environment, tenant=tenant, user=user)


def _status_level(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assigns the request id and logs each request with its outcome."""

    def __init__(
        self,
        app,
        header_name: str = "X-Request-ID",
        generate_id: Callable[[], str] | None = None,
        log_requests: bool = True,
    ):
        super().__init__(app)
        self.header_name = header_name
        self.generate_id = generate_id or (lambda: secrets.token_hex(16))
        self.log_requests = log_requests

    def _request_id(self, request: Request) -> str:
        # [A-Za-z0-9_-] only
        supplied = request.headers.get(self.header_name, "")[:MAX_REQUEST_ID_LENGTH]
        cleaned = "".join(c for c in supplied if c.isalnum() or c in "-_")
        return cleaned or self.generate_id()

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        ctx = RequestContext(
            request_id=self._request_id(request),
            method=request.method,
            path=request.url.path,
        )
        token = _current.set(ctx)
        set_request_context(request_id=ctx.request_id)
        request.state.request_id = ctx.request_id

        if self.log_requests:
            logger.info(f"{ctx.method} {ctx.path} started")

        try:
            response = await call_next(request)
            response.headers[self.header_name] = ctx.request_id
            if self.log_requests:
                logger.log(
                    _status_level(response.status_code),
                    f"{ctx.method} {ctx.path} -> {response.status_code} in {ctx.elapsed_ms}ms",
                    extra={
                        "status_code": response.status_code,
                        "duration_ms": ctx.elapsed_ms,
                        "environment_served": ctx.environment,
                        "tenant_served": ctx.tenant,
                    },
                )
            return response
        except Exception:
            logger.exception(f"{ctx.method} {ctx.path} failed after {ctx.elapsed_ms}ms")
            raise
        finally:
            _current.reset(token)
            clear_request_context()


__all__ = [
    "RequestContext",
    "RequestContextMiddleware",
    "set_profile_context",
]
