"""Domain entities.

Entities are mutable objects with identity.
"""

from src.domain.entities.integration_credential import IntegrationCredential

__all__ = ["IntegrationCredential"]
