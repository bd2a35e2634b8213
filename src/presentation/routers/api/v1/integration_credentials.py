"""Integration credential resource handlers.

Handler functions for managing per-tenant upstream credentials. Every write
drops the ProviderFactory cache entry of the affected account identifier so
the next proxied call reads the new credentials.
Routes are registered via ROUTE_REGISTRY in routes/registry.py.

Handlers:
    create_integration_credential  - Store credentials for a tenant
    list_integration_credentials   - List credentials (filterable, paged)
    count_integration_credentials  - Count credentials
    get_integration_credential     - Get one credential
    update_integration_credential  - Partial update (PATCH)
    replace_integration_credential - Full replacement (PUT)
    delete_integration_credential  - Delete a credential
"""

from datetime import UTC, datetime
from typing import Annotated, Any
from uuid import UUID

import structlog
from fastapi import Depends, Path, Query, Request, Response, status
from fastapi.responses import JSONResponse
from uuid_extensions import uuid7

from src.application.errors import ApplicationError, ApplicationErrorCode
from src.core.container import (
    get_integration_credential_repository,
    get_provider_factory,
)
from src.core.enums import ErrorCode
from src.core.errors import ConflictError, NotFoundError
from src.domain.entities.integration_credential import IntegrationCredential
from src.domain.protocols import IntegrationCredentialRepository
from src.infrastructure.providers.provider_factory import ProviderFactory
from src.presentation.routers.api.middleware.auth_dependencies import (
    AuthenticatedUser,
)
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder
from src.schemas.integration_credential_schemas import (
    CountResponse,
    IntegrationCredentialCreateRequest,
    IntegrationCredentialResponse,
    IntegrationCredentialUpdateRequest,
)

logger = structlog.get_logger(__name__)

Repository = Annotated[
    IntegrationCredentialRepository,
    Depends(get_integration_credential_repository),
]
Factory = Annotated[ProviderFactory, Depends(get_provider_factory)]
CredentialId = Annotated[UUID, Path(description="Integration credential ID")]


def _error(request: Request, error: ApplicationError) -> JSONResponse:
    return ErrorResponseBuilder.from_application_error(
        error=error,
        request=request,
        trace_id=get_trace_id() or "",
    )


def _not_found(credential_id: UUID) -> ApplicationError:
    message = f"Integration credential {credential_id} not found"
    return ApplicationError(
        code=ApplicationErrorCode.NOT_FOUND,
        message=message,
        domain_error=NotFoundError(
            code=ErrorCode.RESOURCE_NOT_FOUND,
            message=message,
            resource_type="IntegrationCredential",
            resource_id=str(credential_id),
        ),
    )


def _conflict(provider_type: str, account_identifier: str) -> ApplicationError:
    message = (
        f"Credentials for provider {provider_type} and account "
        f"{account_identifier} already exist"
    )
    return ApplicationError(
        code=ApplicationErrorCode.CONFLICT,
        message=message,
        domain_error=ConflictError(
            code=ErrorCode.CREDENTIAL_ALREADY_EXISTS,
            message=message,
            resource_type="IntegrationCredential",
            conflicting_field="accountIdentifier",
        ),
    )


async def _is_taken(
    repository: IntegrationCredentialRepository,
    *,
    provider_type: str,
    account_identifier: str,
    exclude_id: UUID | None = None,
) -> bool:
    existing = await repository.find_one(
        provider_type=provider_type,
        account_identifier=account_identifier,
    )
    return existing is not None and existing.id != exclude_id


async def create_integration_credential(
    request: Request,
    current_user: AuthenticatedUser,
    data: IntegrationCredentialCreateRequest,
    repository: Repository,
    factory: Factory,
) -> IntegrationCredentialResponse | JSONResponse:
    """Store credentials for a tenant.

    POST /api/v1/integration-credentials → 201 Created

    Returns:
        IntegrationCredentialResponse with secrets masked.
        JSONResponse with RFC 9457 error (409) when the provider and
        account pair is already stored.
    """
    if await _is_taken(
        repository,
        provider_type=data.provider_type,
        account_identifier=data.account_identifier,
    ):
        return _error(request, _conflict(data.provider_type, data.account_identifier))

    credential = IntegrationCredential(
        id=uuid7(),
        provider_type=data.provider_type,
        account_identifier=data.account_identifier,
        credentials=data.credentials,
        expiry_date=data.expiry_date,
        version=data.version,
        automatic_update=data.automatic_update,
        created_by=current_user.subject,
        updated_by=current_user.subject,
    )
    await repository.save(credential)
    factory.invalidate(credential.account_identifier)

    logger.info(
        "integration_credential_created",
        credential_id=str(credential.id),
        provider_type=credential.provider_type,
        account_identifier=credential.account_identifier,
    )
    return IntegrationCredentialResponse.from_entity(credential)


async def list_integration_credentials(
    current_user: AuthenticatedUser,
    repository: Repository,
    provider_type: Annotated[
        str | None,
        Query(alias="providerType", description="Filter by provider type"),
    ] = None,
    account_identifier: Annotated[
        str | None,
        Query(alias="accountIdentifier", description="Filter by account"),
    ] = None,
    limit: Annotated[int, Query(ge=1, le=500, description="Page size")] = 100,
    offset: Annotated[int, Query(ge=0, description="Records to skip")] = 0,
) -> list[IntegrationCredentialResponse]:
    """List credentials, newest first.

    GET /api/v1/integration-credentials → 200 OK
    """
    credentials = await repository.list_all(
        provider_type=provider_type,
        account_identifier=account_identifier,
        limit=limit,
        offset=offset,
    )
    return [IntegrationCredentialResponse.from_entity(c) for c in credentials]


async def count_integration_credentials(
    current_user: AuthenticatedUser,
    repository: Repository,
    provider_type: Annotated[str | None, Query(alias="providerType")] = None,
    account_identifier: Annotated[str | None, Query(alias="accountIdentifier")] = None,
) -> CountResponse:
    """GET /api/v1/integration-credentials/count → 200 OK"""
    count = await repository.count(
        provider_type=provider_type,
        account_identifier=account_identifier,
    )
    return CountResponse(count=count)


async def get_integration_credential(
    request: Request,
    current_user: AuthenticatedUser,
    credential_id: CredentialId,
    repository: Repository,
) -> IntegrationCredentialResponse | JSONResponse:
    """GET /api/v1/integration-credentials/{credential_id} → 200 OK"""
    credential = await repository.find_by_id(credential_id)
    if credential is None:
        return _error(request, _not_found(credential_id))
    return IntegrationCredentialResponse.from_entity(credential)


async def update_integration_credential(
    request: Request,
    current_user: AuthenticatedUser,
    credential_id: CredentialId,
    data: IntegrationCredentialUpdateRequest,
    repository: Repository,
    factory: Factory,
) -> IntegrationCredentialResponse | JSONResponse:
    """Apply a partial update.

    PATCH /api/v1/integration-credentials/{credential_id} → 200 OK

    Only fields present in the body change. A ``credentials`` map is merged
    into the stored one, so rotating ``apiKey`` keeps ``baseUrl``.
    """
    credential = await repository.find_by_id(credential_id)
    if credential is None:
        return _error(request, _not_found(credential_id))

    changes: dict[str, Any] = data.model_dump(exclude_unset=True)
    if "credentials" in changes:
        changes["credentials"] = {
            **credential.credentials,
            **(changes["credentials"] or {}),
        }
    return await _apply(
        request,
        credential,
        changes,
        current_user.subject,
        repository,
        factory,
    )


async def replace_integration_credential(
    request: Request,
    current_user: AuthenticatedUser,
    credential_id: CredentialId,
    data: IntegrationCredentialCreateRequest,
    repository: Repository,
    factory: Factory,
) -> IntegrationCredentialResponse | JSONResponse:
    """Replace every editable field.

    PUT /api/v1/integration-credentials/{credential_id} → 200 OK
    """
    credential = await repository.find_by_id(credential_id)
    if credential is None:
        return _error(request, _not_found(credential_id))

    return await _apply(
        request,
        credential,
        data.model_dump(),
        current_user.subject,
        repository,
        factory,
    )


async def _apply(
    request: Request,
    credential: IntegrationCredential,
    changes: dict[str, Any],
    subject: str,
    repository: IntegrationCredentialRepository,
    factory: ProviderFactory,
) -> IntegrationCredentialResponse | JSONResponse:
    previous_account = credential.account_identifier
    provider_type = changes.get("provider_type") or credential.provider_type
    account_identifier = changes.get("account_identifier") or previous_account

    if (
        provider_type != credential.provider_type
        or account_identifier != previous_account
    ) and await _is_taken(
        repository,
        provider_type=provider_type,
        account_identifier=account_identifier,
        exclude_id=credential.id,
    ):
        return _error(request, _conflict(provider_type, account_identifier))

    for name, value in changes.items():
        if name in ("provider_type", "account_identifier") and not value:
            continue
        if name == "automatic_update" and value is None:
            continue
        setattr(credential, name, value)

    credential.updated_by = subject
    credential.updated_at = datetime.now(UTC)
    await repository.save(credential)

    factory.invalidate(previous_account)
    if credential.account_identifier != previous_account:
        factory.invalidate(credential.account_identifier)

    logger.info(
        "integration_credential_updated",
        credential_id=str(credential.id),
        account_identifier=credential.account_identifier,
        fields=sorted(changes),
    )
    return IntegrationCredentialResponse.from_entity(credential)


async def delete_integration_credential(
    request: Request,
    current_user: AuthenticatedUser,
    credential_id: CredentialId,
    repository: Repository,
    factory: Factory,
) -> Response:
    """DELETE /api/v1/integration-credentials/{credential_id} → 204 No Content"""
    credential = await repository.find_by_id(credential_id)
    if credential is None:
        return _error(request, _not_found(credential_id))

    await repository.delete(credential_id)
    factory.invalidate(credential.account_identifier)

    logger.info(
        "integration_credential_deleted",
        credential_id=str(credential_id),
        account_identifier=credential.account_identifier,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
