"""Unit tests for application layer errors.

Covers the mapping from provider and credential failures to
ApplicationErrorCode, which in turn decides the HTTP status.
"""

import pytest

from src.application.errors import (
    ApplicationError,
    ApplicationErrorCode,
    to_application_error,
)
from src.core.enums import ErrorCode
from src.core.errors import ValidationError
from src.domain.errors import (
    CredentialExpiredError,
    CredentialNotFoundError,
    ProviderAuthenticationError,
    ProviderBadRequestError,
    ProviderInternalError,
    ProviderNotFoundError,
    ProviderRateLimitError,
    ProviderUnavailableError,
)


@pytest.mark.unit
class TestApplicationErrorCode:
    """Unit tests for ApplicationErrorCode enum."""

    def test_enum_values_are_snake_case(self):
        for code in ApplicationErrorCode:
            assert code.value == code.value.lower()
            assert " " not in code.value

    def test_rate_limit_value(self):
        assert ApplicationErrorCode.RATE_LIMIT_EXCEEDED.value == "rate_limit_exceeded"


@pytest.mark.unit
class TestApplicationError:
    def test_create_error_with_required_fields(self):
        error = ApplicationError(
            code=ApplicationErrorCode.NOT_FOUND,
            message="Integration credential not found",
        )

        assert error.domain_error is None
        assert error.details is None

    def test_error_is_immutable(self):
        error = ApplicationError(code=ApplicationErrorCode.CONFLICT, message="dup")

        with pytest.raises(AttributeError):
            error.message = "changed"  # type: ignore[misc]


_PROVIDER = {"message": "upstream said no", "provider_name": "mural"}


@pytest.mark.unit
class TestToApplicationError:
    """Failure kind to application code mapping."""

    @pytest.mark.parametrize(
        ("domain_error", "expected"),
        [
            (
                ProviderBadRequestError(
                    code=ErrorCode.PROVIDER_BAD_REQUEST, errors=["x"], **_PROVIDER
                ),
                ApplicationErrorCode.BAD_REQUEST,
            ),
            (
                ProviderAuthenticationError(
                    code=ErrorCode.PROVIDER_AUTHENTICATION_FAILED, **_PROVIDER
                ),
                ApplicationErrorCode.UNAUTHORIZED,
            ),
            (
                ProviderNotFoundError(
                    code=ErrorCode.PROVIDER_RESOURCE_NOT_FOUND, **_PROVIDER
                ),
                ApplicationErrorCode.NOT_FOUND,
            ),
            (
                ProviderRateLimitError(
                    code=ErrorCode.PROVIDER_RATE_LIMITED, retry_after=5, **_PROVIDER
                ),
                ApplicationErrorCode.RATE_LIMIT_EXCEEDED,
            ),
            (
                ProviderUnavailableError(
                    code=ErrorCode.PROVIDER_UNAVAILABLE, **_PROVIDER
                ),
                ApplicationErrorCode.SERVICE_UNAVAILABLE,
            ),
            (
                ProviderInternalError(
                    code=ErrorCode.PROVIDER_INTERNAL_ERROR, status_code=502, **_PROVIDER
                ),
                ApplicationErrorCode.UPSTREAM_ERROR,
            ),
            (
                CredentialNotFoundError(
                    code=ErrorCode.CREDENTIAL_NOT_FOUND,
                    message="No Mural credentials found for account acme",
                    account_identifier="acme",
                ),
                ApplicationErrorCode.NOT_FOUND,
            ),
            (
                CredentialExpiredError(
                    code=ErrorCode.CREDENTIAL_EXPIRED,
                    message="expired",
                    account_identifier="acme",
                ),
                ApplicationErrorCode.FORBIDDEN,
            ),
        ],
    )
    def test_kind_maps_to_code(self, domain_error, expected):
        error = to_application_error(domain_error)

        assert error.code == expected
        assert error.message == domain_error.message
        assert error.domain_error is domain_error

    def test_error_without_kind_is_upstream_error(self):
        domain_error = ValidationError(
            code=ErrorCode.VALIDATION_FAILED,
            message="bad input",
        )

        error = to_application_error(domain_error)

        assert error.code == ApplicationErrorCode.UPSTREAM_ERROR
