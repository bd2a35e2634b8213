"""Database models for persistence layer.

This package contains SQLAlchemy database models that map to database
tables. These are infrastructure concerns and should not be imported by the
domain layer.

Models Organization:
    - integration_credential.py: Per-tenant upstream provider credentials

Note:
    Domain entities (dataclasses) live in src/domain/entities/
    Database models (SQLAlchemy) live here in src/infrastructure/persistence/models/
    They are separate and mapped via repository layer.
"""

from src.infrastructure.persistence.models.integration_credential import (
    IntegrationCredential as IntegrationCredentialModel,
)

__all__ = [
    "IntegrationCredentialModel",
]
