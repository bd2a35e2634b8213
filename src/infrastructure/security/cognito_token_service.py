"""Cognito access token verification (adapter).

This service implements TokenVerificationProtocol using PyJWT against the
JSON Web Key Set published by an AWS Cognito user pool.

Architecture:
    - Implements TokenVerificationProtocol (no inheritance required)
    - Structural typing via Protocol
    - Injected via dependency container

Security:
    - RS256 signatures checked against the pool's JWKS (keys cached by PyJWKClient)
    - Issuer must match the configured user pool
    - Audience (client_id claim for access tokens, aud for ID tokens) is
      checked when a client ID is configured
"""

from typing import Any, Protocol

import jwt
import structlog
from jwt.exceptions import InvalidTokenError, PyJWKClientError

from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError
from src.core.result import Failure, Result, Success

logger = structlog.get_logger(__name__)


class SigningKeySource(Protocol):
    """Anything that can pick the verification key for a token (PyJWKClient)."""

    def get_signing_key_from_jwt(self, token: str) -> Any: ...


class CognitoTokenService:
    """Verify Cognito-issued bearer tokens.

    Example:
        >>> service = CognitoTokenService(
        ...     issuer="https://cognito-idp.us-east-1.amazonaws.com/us-east-1_abc",
        ...     client_id="app-client",
        ... )
        >>> match service.validate_access_token(token):
        ...     case Success(value=claims):
        ...         print(claims["sub"])
        ...     case Failure(error=error):
        ...         print(error.message)
    """

    def __init__(
        self,
        *,
        issuer: str,
        client_id: str | None = None,
        key_source: SigningKeySource | None = None,
        algorithms: tuple[str, ...] = ("RS256",),
    ) -> None:
        """Initialize token service.

        Args:
            issuer: Expected ``iss`` claim (user pool URL).
            client_id: Expected app client ID; not checked when None.
            key_source: Signing key resolver (defaults to the pool's JWKS).
            algorithms: Accepted signature algorithms.
        """
        self._issuer = issuer.rstrip("/")
        self._client_id = client_id
        self._algorithms = list(algorithms)
        self._key_source = key_source or jwt.PyJWKClient(
            f"{self._issuer}/.well-known/jwks.json"
        )

    def validate_access_token(
        self,
        token: str,
    ) -> Result[dict[str, Any], AuthenticationError]:
        """Validate a bearer token and return its claims.

        Args:
            token: Encoded JWT from the Authorization header.

        Returns:
            Success(dict): Verified claims.
            Failure(AuthenticationError): Signature, issuer, expiry or
                audience check failed, or the signing key is unknown.
        """
        try:
            signing_key = self._key_source.get_signing_key_from_jwt(token)
            claims: dict[str, Any] = jwt.decode(
                token,
                signing_key.key,
                algorithms=self._algorithms,
                issuer=self._issuer,
                options={"verify_aud": False},
            )
        except jwt.ExpiredSignatureError:
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TOKEN_EXPIRED,
                    message="Access token has expired",
                )
            )
        except (InvalidTokenError, PyJWKClientError) as e:
            logger.info("access_token_rejected", reason=type(e).__name__)
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TOKEN_INVALID,
                    message="Invalid access token",
                )
            )

        if self._client_id and self._audience_of(claims) != self._client_id:
            logger.info("access_token_rejected", reason="audience_mismatch")
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TOKEN_INVALID,
                    message="Invalid audience",
                )
            )

        return Success(value=claims)

    @staticmethod
    def _audience_of(claims: dict[str, Any]) -> str | None:
        # Access tokens carry client_id; ID tokens carry aud
        audience = claims.get("client_id") or claims.get("aud")
        if isinstance(audience, list):
            return audience[0] if audience else None
        return audience
