"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Validation errors (INVALID_*, VALIDATION_*)
- Resource errors (*_NOT_FOUND)
- Conflict errors (*_ALREADY_EXISTS)
- Authentication errors (TOKEN_*, AUTHENTICATION_*)
- Credential errors (CREDENTIAL_*)
- Provider errors (PROVIDER_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Validation errors
    VALIDATION_FAILED = "validation_failed"
    INVALID_INPUT = "invalid_input"

    # Resource errors
    RESOURCE_NOT_FOUND = "resource_not_found"

    # Conflict errors
    CREDENTIAL_ALREADY_EXISTS = "credential_already_exists"

    # Authentication errors
    TOKEN_EXPIRED = "token_expired"
    TOKEN_INVALID = "token_invalid"
    AUTHENTICATION_FAILED = "authentication_failed"

    # Integration credential errors
    CREDENTIAL_NOT_FOUND = "credential_not_found"
    CREDENTIAL_INVALID = "credential_invalid"
    CREDENTIAL_EXPIRED = "credential_expired"

    # Provider errors
    PROVIDER_BAD_REQUEST = "provider_bad_request"
    PROVIDER_AUTHENTICATION_FAILED = "provider_authentication_failed"
    PROVIDER_RESOURCE_NOT_FOUND = "provider_resource_not_found"
    PROVIDER_RATE_LIMITED = "provider_rate_limited"
    PROVIDER_UNAVAILABLE = "provider_unavailable"
    PROVIDER_INTERNAL_ERROR = "provider_internal_error"
    PROVIDER_INVALID_RESPONSE = "provider_invalid_response"
    PROVIDER_NOT_CONFIGURED = "provider_not_configured"
