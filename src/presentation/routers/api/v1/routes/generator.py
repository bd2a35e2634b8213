"""Route generator for the API Route Registry.

register_routes_from_registry() turns RouteMetadata entries into FastAPI
routes at application startup.

Functions:
    register_routes_from_registry: Generate all routes from registry
    _build_dependencies: Build FastAPI dependencies from auth policy
    _build_responses: Build OpenAPI responses dict from error specs

Usage:
    from src.presentation.routers.api.v1.routes.registry import ROUTE_REGISTRY
    from src.presentation.routers.api.v1.routes.generator import register_routes_from_registry

    v1_router = APIRouter(prefix="/api/v1")
    register_routes_from_registry(v1_router, ROUTE_REGISTRY)
"""

from typing import Any

from fastapi import APIRouter, Depends

from src.presentation.routers.api.middleware.auth_dependencies import (
    get_current_user,
)
from src.presentation.routers.api.v1.routes.metadata import (
    AuthLevel,
    AuthPolicy,
    ErrorSpec,
    RouteMetadata,
)

# Every authenticated route can fail these ways regardless of its handler
_AUTHENTICATED_ERRORS = [
    ErrorSpec(status=401, description="Missing, invalid or expired bearer token"),
]


def register_routes_from_registry(
    router: APIRouter,
    registry: list[RouteMetadata],
) -> None:
    """Generate FastAPI routes from registry metadata.

    Args:
        router: FastAPI APIRouter to register routes on
        registry: List of RouteMetadata entries to convert into routes

    Raises:
        ValueError: If two entries share the same method and path.
    """
    seen: set[tuple[str, str]] = set()

    for metadata in registry:
        key = (metadata.method.value, metadata.path)
        if key in seen:
            raise ValueError(f"Duplicate route: {key[0]} {key[1]}")
        seen.add(key)

        dependencies = _build_dependencies(metadata.auth_policy)

        errors = list(metadata.errors or [])
        if metadata.auth_policy.level is AuthLevel.AUTHENTICATED:
            errors = _AUTHENTICATED_ERRORS + errors
        responses = _build_responses(errors) if errors else None

        router.add_api_route(
            path=metadata.path,
            endpoint=metadata.handler,
            methods=[metadata.method.value],
            response_model=metadata.response_model,
            status_code=metadata.status_code,
            tags=list(metadata.tags),  # Convert Sequence to list for FastAPI
            summary=metadata.summary,
            description=metadata.description,
            operation_id=metadata.operation_id,
            responses=responses,
            dependencies=dependencies,
            deprecated=metadata.deprecated,
        )


def _build_dependencies(auth_policy: AuthPolicy) -> list[Any]:
    """Build FastAPI dependencies from auth policy.

    Auth policy mapping:
        PUBLIC: No dependencies (anyone can access)
        AUTHENTICATED: Depends(get_current_user) - requires a verified token

    Handlers that also declare ``AuthenticatedUser`` share the same resolved
    dependency, so the token is verified once per request.

    Args:
        auth_policy: Authentication policy from RouteMetadata

    Returns:
        List of FastAPI dependencies to inject
    """
    match auth_policy.level:
        case AuthLevel.PUBLIC:
            return []

        case AuthLevel.AUTHENTICATED:
            return [Depends(get_current_user)]

        case _:
            # Unknown auth level - fail closed (no access)
            msg = f"Unknown auth level: {auth_policy.level}"
            raise ValueError(msg)


def _build_responses(errors: list[ErrorSpec]) -> dict[int | str, dict[str, Any]]:
    """Build OpenAPI responses dict from error specifications.

    Example:
        >>> _build_responses([ErrorSpec(status=404, description="Not found")])
        {404: {'description': 'Not found'}}
    """
    return {error.status: {"description": error.description} for error in errors}
