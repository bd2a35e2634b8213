"""Application layer errors.

This package contains error types for the application layer.

Exports:
    ApplicationError: Application layer error dataclass
    ApplicationErrorCode: Application-level error code enum
    to_application_error: Map a provider/credential domain error
"""

from src.application.errors.application_error import (
    ApplicationError,
    ApplicationErrorCode,
    to_application_error,
)

__all__ = [
    "ApplicationError",
    "ApplicationErrorCode",
    "to_application_error",
]
