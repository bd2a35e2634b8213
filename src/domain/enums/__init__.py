"""Domain enums for business logic.

This package contains enumerations used throughout the domain layer.

Available Enums:
    - ProviderErrorKind: Normalized failure kinds of provider calls
"""

from src.domain.enums.provider_error_kind import ProviderErrorKind

__all__ = ["ProviderErrorKind"]
