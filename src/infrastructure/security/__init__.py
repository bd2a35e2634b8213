"""Security adapters.

Exports:
    CognitoTokenService: Bearer token verification against a Cognito pool
"""

from src.infrastructure.security.cognito_token_service import CognitoTokenService

__all__ = ["CognitoTokenService"]
