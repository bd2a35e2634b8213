"""RFC 9457 Problem Details for HTTP APIs.

Pydantic models for the structured error body returned by every failing
route, whether the failure came from the Mural API, the credential store,
authentication or request validation.

RFC 9457: https://www.rfc-editor.org/rfc/rfc9457

Exports:
    ErrorDetail: Individual field-specific error
    ProblemDetails: RFC 9457 compliant error response schema
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Individual field-specific error.

    Used for request validation failures and for the ``details`` list the
    Mural API returns with a 400.

    Attributes:
        field: Name of the field with error ("body" for upstream details)
        code: Machine-readable error code
        message: Human-readable error message

    Examples:
        >>> error = ErrorDetail(
        ...     field="body",
        ...     code="provider_bad_request",
        ...     message="amount must be positive",
        ... )
    """

    field: str = Field(..., description="Field name")
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")


class ProblemDetails(BaseModel):
    """RFC 9457 Problem Details for HTTP APIs.

    Attributes:
        type: URI reference identifying the problem type
        title: Short, human-readable summary of the problem type
        status: HTTP status code for this occurrence
        detail: Human-readable explanation specific to this occurrence
        instance: URI reference identifying the specific occurrence
        errors: Optional list of field-specific errors
        trace_id: Optional request trace ID for debugging
        retry_after: Seconds to wait before retrying (throttled requests only)

    Examples:
        >>> problem = ProblemDetails(
        ...     type="https://api.muralproxy.local/errors/rate_limit_exceeded",
        ...     title="Rate Limit Exceeded",
        ...     status=429,
        ...     detail="Mural API rate limit exceeded",
        ...     instance="/api/v1/mural/acme/accounts",
        ...     retry_after=30,
        ...     trace_id="550e8400-e29b-41d4-a716-446655440000",
        ... )
    """

    type: str = Field(
        ...,
        description="URI reference identifying the problem type",
        examples=["https://api.muralproxy.local/errors/not_found"],
    )
    title: str = Field(
        ...,
        description="Short, human-readable summary",
        examples=["Resource Not Found"],
    )
    status: int = Field(
        ...,
        description="HTTP status code",
        examples=[404],
    )
    detail: str = Field(
        ...,
        description="Human-readable explanation",
        examples=["No Mural credentials found for account acme"],
    )
    instance: str = Field(
        ...,
        description="URI reference identifying this occurrence",
        examples=["/api/v1/mural/acme/accounts"],
    )
    errors: list[ErrorDetail] | None = Field(
        None,
        description="List of field-specific errors",
    )
    trace_id: str | None = Field(
        None,
        description="Request trace ID for debugging",
    )
    retry_after: int | None = Field(
        None,
        description="Seconds to wait before retrying a throttled request",
    )
