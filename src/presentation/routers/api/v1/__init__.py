"""API v1 routers.

All routes are generated from the Route Metadata Registry at startup.
The registry (ROUTE_REGISTRY) is the single source of truth for all endpoints.
See src/presentation/routers/api/v1/routes/registry.py for the complete route catalog.

Resources:
    /api/v1/mural/{account_identifier}/accounts       - Mural accounts
    /api/v1/mural/{account_identifier}/organizations  - Mural organizations
    /api/v1/mural/{account_identifier}/payouts        - Mural payouts and fees
    /api/v1/mural/{account_identifier}/transactions   - Mural transactions
    /api/v1/mural/provider-cache                      - Provider client cache
    /api/v1/integration-credentials                   - Tenant credentials
"""

from fastapi import APIRouter

from src.presentation.routers.api.v1.routes.generator import (
    register_routes_from_registry,
)
from src.presentation.routers.api.v1.routes.registry import ROUTE_REGISTRY

# Create v1 router and generate all routes from registry
v1_router = APIRouter(prefix="/api/v1")
register_routes_from_registry(v1_router, ROUTE_REGISTRY)

__all__ = [
    "v1_router",
]
