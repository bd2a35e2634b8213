"""Application layer error types.

This module defines application-level errors that wrap domain errors and add
application-specific context (provider call and credential store failures).

Exports:
    ApplicationErrorCode: Application-level error code enum
    ApplicationError: Application layer error dataclass
    to_application_error: Map a provider/credential domain error
"""

from dataclasses import dataclass
from enum import Enum

from src.core.errors.domain_error import DomainError
from src.domain.enums import ProviderErrorKind


class ApplicationErrorCode(Enum):
    """Application-level error codes.

    These codes represent failures at the application layer, typically
    wrapping domain errors with additional context.

    Examples:
        >>> error = ApplicationError(
        ...     code=ApplicationErrorCode.NOT_FOUND,
        ...     message="No Mural credentials found for account acme",
        ... )
    """

    BAD_REQUEST = "bad_request"
    UPSTREAM_ERROR = "upstream_error"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    SERVICE_UNAVAILABLE = "service_unavailable"


@dataclass(frozen=True, slots=True, kw_only=True)
class ApplicationError:
    """Application layer error.

    Wraps domain errors with application-specific context. Used by request
    handlers to provide structured error information to the presentation layer.

    Attributes:
        code: Application error code (from ApplicationErrorCode enum)
        message: Human-readable error message
        domain_error: Original domain error (if error originated from domain layer)
        details: Additional context as key-value pairs

    Examples:
        >>> error = ApplicationError(
        ...     code=ApplicationErrorCode.RATE_LIMIT_EXCEEDED,
        ...     message="Mural API rate limit exceeded",
        ...     domain_error=rate_limit_error,
        ... )
    """

    code: ApplicationErrorCode
    message: str
    domain_error: DomainError | None = None
    details: dict[str, str] | None = None


_KIND_TO_CODE: dict[ProviderErrorKind, ApplicationErrorCode] = {
    ProviderErrorKind.BAD_REQUEST: ApplicationErrorCode.BAD_REQUEST,
    ProviderErrorKind.UNAUTHORIZED: ApplicationErrorCode.UNAUTHORIZED,
    ProviderErrorKind.FORBIDDEN: ApplicationErrorCode.FORBIDDEN,
    ProviderErrorKind.NOT_FOUND: ApplicationErrorCode.NOT_FOUND,
    ProviderErrorKind.RATE_LIMITED: ApplicationErrorCode.RATE_LIMIT_EXCEEDED,
    ProviderErrorKind.SERVICE_UNAVAILABLE: ApplicationErrorCode.SERVICE_UNAVAILABLE,
    ProviderErrorKind.INTERNAL: ApplicationErrorCode.UPSTREAM_ERROR,
}


def to_application_error(error: DomainError) -> ApplicationError:
    """Wrap a provider or credential error for the presentation layer.

    Errors without a ``kind`` are treated as internal failures.

    Args:
        error: Domain error returned in a Failure.

    Returns:
        ApplicationError carrying the original error.
    """
    kind = getattr(error, "kind", ProviderErrorKind.INTERNAL)
    return ApplicationError(
        code=_KIND_TO_CODE.get(kind, ApplicationErrorCode.UPSTREAM_ERROR),
        message=error.message,
        domain_error=error,
    )
