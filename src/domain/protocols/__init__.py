"""Domain protocols (ports) package.

This package contains protocol definitions that the domain layer needs.
Infrastructure adapters implement these protocols without inheritance.

Usage:
    from src.domain.protocols import CredentialLookupProtocol
    from src.domain.protocols import IntegrationCredentialRepository
"""

from src.domain.protocols.credential_lookup_protocol import CredentialLookupProtocol
from src.domain.protocols.integration_credential_repository import (
    IntegrationCredentialRepository,
)
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.token_verification_protocol import (
    TokenVerificationProtocol,
)

__all__ = [
    "CredentialLookupProtocol",
    "IntegrationCredentialRepository",
    "LoggerProtocol",
    "TokenVerificationProtocol",
]
