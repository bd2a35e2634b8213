"""Repository implementations (adapters for hexagonal architecture).

This package contains concrete implementations of repository protocols
defined in the domain layer.
"""

from src.infrastructure.persistence.repositories.integration_credential_repository import (
    IntegrationCredentialRepository,
)

__all__ = [
    "IntegrationCredentialRepository",
]
