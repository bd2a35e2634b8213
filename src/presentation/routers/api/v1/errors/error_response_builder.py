"""Error response builder for RFC 9457 Problem Details.

This module provides utilities to build RFC 9457 compliant error responses
from application layer errors.

Exports:
    ErrorResponseBuilder: Utility class for building RFC 9457 responses
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from src.application.errors import ApplicationError, ApplicationErrorCode
from src.core.config import settings
from src.core.constants import RATE_LIMIT_EXCEEDED_HEADER
from src.domain.errors import ProviderBadRequestError, ProviderRateLimitError
from src.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)


class ErrorResponseBuilder:
    """Build RFC 9457 Problem Details error responses.

    Converts application layer errors into standardized RFC 9457 JSON responses
    with appropriate HTTP status codes and structured error information.

    Rate-limited errors also carry ``Retry-After`` and
    ``X-Rate-Limit-Exceeded`` headers so clients can show a countdown.

    Example:
        >>> error = to_application_error(provider_error)
        >>> response = ErrorResponseBuilder.from_application_error(
        ...     error=error,
        ...     request=request,
        ...     trace_id="550e8400-e29b-41d4-a716-446655440000",
        ... )
    """

    @staticmethod
    def from_application_error(
        error: ApplicationError,
        request: Request,
        trace_id: str,
    ) -> JSONResponse:
        """Convert ApplicationError to RFC 9457 JSON response.

        Args:
            error: Application layer error to convert
            request: FastAPI Request object (for instance URL)
            trace_id: Request trace ID for debugging

        Returns:
            JSONResponse with RFC 9457 ProblemDetails content
        """
        status_code = ErrorResponseBuilder._get_status_code(error.code)

        problem = ProblemDetails(
            type=f"{settings.api_base_url}/errors/{error.code.value}",
            title=ErrorResponseBuilder._get_title(error.code),
            status=status_code,
            detail=error.message,
            instance=str(request.url.path),
            errors=ErrorResponseBuilder._get_errors(error),
            trace_id=trace_id or None,
        )

        headers: dict[str, str] | None = None
        domain_error = error.domain_error
        if isinstance(domain_error, ProviderRateLimitError):
            problem.retry_after = domain_error.retry_after
            headers = ErrorResponseBuilder.rate_limit_headers(domain_error.retry_after)

        return JSONResponse(
            status_code=status_code,
            content=problem.model_dump(exclude_none=True),
            headers=headers,
        )

    @staticmethod
    def rate_limit_headers(retry_after: int) -> dict[str, str]:
        """Headers announcing a throttled request.

        Args:
            retry_after: Seconds until the client may retry.

        Returns:
            Retry-After and X-Rate-Limit-Exceeded headers.
        """
        return {
            "Retry-After": str(retry_after),
            RATE_LIMIT_EXCEEDED_HEADER: "true",
        }

    @staticmethod
    def _get_errors(error: ApplicationError) -> list[ErrorDetail] | None:
        domain_error = error.domain_error
        if isinstance(domain_error, ProviderBadRequestError) and domain_error.errors:
            return [
                ErrorDetail(
                    field="body",
                    code=domain_error.code.value,
                    message=message,
                )
                for message in domain_error.errors
            ]

        # Field-level domain validation errors
        if domain_error is not None and hasattr(domain_error, "field"):
            return [
                ErrorDetail(
                    field=getattr(domain_error, "field") or "unknown",
                    code=domain_error.code.value,
                    message=domain_error.message,
                )
            ]
        return None

    @staticmethod
    def _get_status_code(code: ApplicationErrorCode) -> int:
        """Map application error code to HTTP status code.

        Args:
            code: Application error code

        Returns:
            HTTP status code (400-599)

        Example:
            >>> ErrorResponseBuilder._get_status_code(
            ...     ApplicationErrorCode.RATE_LIMIT_EXCEEDED
            ... )
            429
        """
        mapping = {
            ApplicationErrorCode.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
            ApplicationErrorCode.UPSTREAM_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
            ApplicationErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
            ApplicationErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
            ApplicationErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
            ApplicationErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
            ApplicationErrorCode.RATE_LIMIT_EXCEEDED: status.HTTP_429_TOO_MANY_REQUESTS,
            ApplicationErrorCode.SERVICE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
        }
        return mapping.get(code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    @staticmethod
    def _get_title(code: ApplicationErrorCode) -> str:
        """Get human-readable title for application error code.

        Args:
            code: Application error code

        Returns:
            Human-readable title string
        """
        mapping = {
            ApplicationErrorCode.BAD_REQUEST: "Bad Request",
            ApplicationErrorCode.UPSTREAM_ERROR: "Upstream Error",
            ApplicationErrorCode.UNAUTHORIZED: "Authentication Required",
            ApplicationErrorCode.FORBIDDEN: "Access Denied",
            ApplicationErrorCode.NOT_FOUND: "Resource Not Found",
            ApplicationErrorCode.CONFLICT: "Resource Conflict",
            ApplicationErrorCode.RATE_LIMIT_EXCEEDED: "Rate Limit Exceeded",
            ApplicationErrorCode.SERVICE_UNAVAILABLE: "Service Unavailable",
        }
        return mapping.get(code, "Internal Server Error")
