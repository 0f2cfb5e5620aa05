"""Application exceptions.

Raising one of these anywhere in request handling produces a Problem
Details response with the class's status and error code; see
``storefront_api.core.errors.handlers``.
"""

from typing import Any


class AppException(Exception):
    """Base class for errors reported to API clients.

    Subclasses set ``message``, ``error_code`` and ``status_code`` as
    class attributes; instances may override the first two.

    Attributes:
        message: Human-readable explanation, sent as ``detail``
        error_code: Stable machine-readable code, last segment of ``type``
        status_code: HTTP status of the response
        details: Extra members merged into the response body
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class BadRequestError(AppException):
    message = "Bad request"
    error_code = "bad_request"
    status_code = 400


class NotFoundError(AppException):
    """A looked-up resource does not exist.

    Example:
        raise NotFoundError(resource="organization", resource_id=slug)
    """

    message = "Resource not found"
    error_code = "not_found"
    status_code = 404

    def __init__(
        self,
        message: str | None = None,
        resource: str | None = None,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        details: dict[str, Any] = kwargs.pop("details", None) or {}
        if resource:
            details["resource"] = resource
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message=message, details=details, **kwargs)


class RateLimitError(AppException):
    """Client exceeded its request budget; ``details`` carries ``retry_after``."""

    message = "Rate limit exceeded"
    error_code = "rate_limit_exceeded"
    status_code = 429


class ServiceUnavailableError(AppException):
    """A backing store (database, cache) failed while serving the request."""

    message = "Service temporarily unavailable"
    error_code = "service_unavailable"
    status_code = 503


class TenantRequiredError(BadRequestError):
    """The endpoint needs a tenant but the request's host names none."""

    message = "No tenant could be determined for this request"
    error_code = "tenant_required"


class TenantNotFoundError(NotFoundError):
    """The request's tenant slug matches no organization."""

    message = "Tenant not found"
    error_code = "tenant_not_found"

    def __init__(self, slug: str, **kwargs: Any) -> None:
        super().__init__(resource="organization", resource_id=slug, **kwargs)
        self.slug = slug
