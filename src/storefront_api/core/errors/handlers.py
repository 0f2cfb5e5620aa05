"""RFC 7807 Problem Details responses.

Every error leaving the API, whether raised in a route, rejected by
request validation, or produced by middleware before routing, is
rendered through ``_render`` so clients see one body shape:

    {"type": ".../errors/tenant_not_found", "title": "Tenant Not Found",
     "status": 404, "detail": "...", "instance": "/api/v1/...",
     "trace_id": "...", "resource_id": "acme"}

See: https://tools.ietf.org/html/rfc7807
"""

from typing import TYPE_CHECKING, Any, cast

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict

from storefront_api.config import settings
from storefront_api.core.errors.exceptions import AppException


if TYPE_CHECKING:
    from starlette.types import ExceptionHandler


logger = structlog.get_logger()


class FieldError(BaseModel):
    """One invalid request field."""

    field: str
    message: str
    type: str | None = None


class ProblemDetail(BaseModel):
    """Problem Details body; extra members carry exception details."""

    model_config = ConfigDict(extra="allow")

    type: str
    title: str
    status: int
    detail: str
    instance: str | None = None
    errors: list[FieldError] | None = None
    trace_id: str | None = None


def get_error_type_uri(error_code: str) -> str:
    """Documentation URI identifying an error code."""
    return f"{settings.api_docs_base_url}/errors/{error_code}"


def _render(
    request: Request,
    status_code: int,
    error_code: str,
    detail: str,
    *,
    title: str | None = None,
    errors: list[FieldError] | None = None,
    extra: dict[str, Any] | None = None,
) -> JSONResponse:
    body = ProblemDetail(
        type=get_error_type_uri(error_code),
        title=title or error_code.replace("_", " ").title(),
        status=status_code,
        detail=detail,
        instance=request.url.path,
        errors=errors,
        trace_id=getattr(request.state, "trace_id", None),
    ).model_dump(exclude_none=True)

    # Standard members win over same-named details
    for key, value in (extra or {}).items():
        body.setdefault(key, value)

    return JSONResponse(status_code=status_code, content=body)


def problem_response(request: Request, exc: AppException) -> JSONResponse:
    """Render an AppException.

    Also used by middleware, which runs outside the exception handlers.
    """
    return _render(
        request, exc.status_code, exc.error_code, exc.message, extra=exc.details
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    logger.warning(
        "app_exception",
        error_code=exc.error_code,
        status_code=exc.status_code,
        path=request.url.path,
        details=exc.details,
    )
    return problem_response(request, exc)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report each invalid field, with its location joined by dots."""
    errors = [
        FieldError(
            field=".".join(str(part) for part in error.get("loc", ()) if part != "body")
            or "unknown",
            message=error.get("msg", "Invalid value"),
            type=error.get("type"),
        )
        for error in exc.errors()
    ]

    logger.warning("validation_error", path=request.url.path, error_count=len(errors))

    return _render(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "validation_error",
        "Request validation failed",
        errors=errors,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the failure, answer 500 without internals."""
    logger.exception(
        "unhandled_exception",
        path=request.url.path,
        error_type=type(exc).__name__,
    )
    return _render(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal_error",
        "An unexpected error occurred",
        title="Internal Server Error",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the Problem Details handlers on an application."""
    handlers: dict[type[Exception], Any] = {
        AppException: app_exception_handler,
        RequestValidationError: validation_exception_handler,
        Exception: generic_exception_handler,
    }
    for exc_class, handler in handlers.items():
        app.add_exception_handler(exc_class, cast("ExceptionHandler", handler))
