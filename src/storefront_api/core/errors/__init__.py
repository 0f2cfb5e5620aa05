"""Error handling module with RFC 7807 Problem Details."""

from storefront_api.core.errors.exceptions import (
    AppException,
    BadRequestError,
    NotFoundError,
    RateLimitError,
    ServiceUnavailableError,
    TenantNotFoundError,
    TenantRequiredError,
)
from storefront_api.core.errors.handlers import (
    FieldError,
    ProblemDetail,
    problem_response,
    register_exception_handlers,
)


__all__ = [
    # Exceptions
    "AppException",
    "BadRequestError",
    # Handlers
    "FieldError",
    "NotFoundError",
    "ProblemDetail",
    "RateLimitError",
    "ServiceUnavailableError",
    "TenantNotFoundError",
    "TenantRequiredError",
    "problem_response",
    "register_exception_handlers",
]
