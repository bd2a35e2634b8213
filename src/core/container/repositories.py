"""Repository dependency factories.

Request-scoped repository instances sharing the request's session.
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.container.infrastructure import get_db_session

if TYPE_CHECKING:
    from src.infrastructure.persistence.repositories import (
        IntegrationCredentialRepository,
    )


async def get_integration_credential_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "IntegrationCredentialRepository":
    """Get integration credential repository (request-scoped).

    Args:
        session: Database session for request duration.
            Injected via Depends(get_db_session).

    Returns:
        IntegrationCredentialRepository instance.
    """
    from src.infrastructure.persistence.repositories import (
        IntegrationCredentialRepository,
    )

    return IntegrationCredentialRepository(session=session)
