"""Request correlation and access logging.

RequestIdMiddleware is the outer of the two: it binds ``request_id`` to
the structlog context, so every event logged while the request is served
(access log lines, tenant resolution, handlers) carries it. The tenant
keys bound further in are cleared with it when the request ends.
"""

import time
import uuid
from typing import Any

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint


logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"

REQUEST_CONTEXT_KEYS = ("request_id", "tenant_slug", "tenant_id")


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Assign each request an id and echo it in ``X-Request-ID``.

    A client-supplied ``X-Request-ID`` is kept so ids can be followed
    across services. The id is also stored as ``request.state.trace_id``
    for Problem Details bodies.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        request.state.trace_id = request_id

        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars(*REQUEST_CONTEXT_KEYS)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Emit ``request_started`` and ``request_completed`` events.

    Completion events carry the status, duration and, when the request
    resolved to an organization, its tenant slug and id. Responses of
    400 and above log as warnings, 500 and above as errors.
    """

    DEFAULT_EXCLUDE_PATHS = ("/health/live", "/health/ready", "/docs", "/redoc", "/openapi.json")

    def __init__(self, app: Any, exclude_paths: list[str] | None = None) -> None:
        super().__init__(app)
        self.exclude_paths = tuple(exclude_paths or self.DEFAULT_EXCLUDE_PATHS)

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        if request.url.path.startswith(self.exclude_paths):
            return await call_next(request)

        log = logger.bind(method=request.method, path=request.url.path)
        log.info(
            "request_started",
            client_ip=get_client_ip(request),
            query=request.url.query or None,
        )

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            log.exception("request_failed", duration_ms=_elapsed_ms(started), error=str(exc))
            raise

        fields: dict[str, Any] = {
            "status_code": response.status_code,
            "duration_ms": _elapsed_ms(started),
        }
        context = getattr(request.state, "tenant_context", None)
        if context is not None and context.slug is not None:
            fields["tenant_slug"] = context.slug
        tenant_id = getattr(request.state, "tenant_id", None)
        if tenant_id is not None:
            fields["tenant_id"] = str(tenant_id)

        if response.status_code >= 500:
            log.error("request_completed", **fields)
        elif response.status_code >= 400:
            log.warning("request_completed", **fields)
        else:
            log.info("request_completed", **fields)

        return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


def get_client_ip(request: Request) -> str | None:
    """Best guess at the caller's address.

    Prefers the first ``X-Forwarded-For`` hop, then ``X-Real-IP``, then
    the socket peer.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return request.client.host if request.client else None
