"""Infrastructure layer - Adapters and external integrations.

This layer contains implementations of domain protocols (ports):
- Database repositories for integration credentials
- The Mural Pay HTTP client and the per-account provider factory
- Logging and bearer-token verification adapters

Structure:
- persistence/: Database adapters (SQLAlchemy repositories)
- providers/: Upstream provider clients, factory and pagination
- logging/: structlog configuration
- security/: Cognito access token verification

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
