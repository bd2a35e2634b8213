"""Bearer token authentication dependencies.

FastAPI dependencies that verify the Cognito-issued bearer token on every
protected route and expose the caller's identity.

Usage:
    @router.get("/protected")
    async def protected_route(current_user: AuthenticatedUser):
        return {"sub": current_user.subject}
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.core.container import get_token_service
from src.core.result import Failure
from src.domain.protocols import TokenVerificationProtocol

# HTTP Bearer token extractor
# auto_error=False so a missing token gets the same Problem Details 401
bearer_scheme = HTTPBearer(auto_error=False)

_UNAUTHORIZED_HEADERS = {"WWW-Authenticate": "Bearer"}


@dataclass(frozen=True, slots=True, kw_only=True)
class CurrentUser:
    """Authenticated caller information from the verified token.

    Attributes:
        subject: Token 'sub' claim (stable user identifier).
        email: Token 'email' claim, when present.
        username: Cognito username ('username' or 'cognito:username').
    """

    subject: str
    email: str | None = None
    username: str | None = None


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers=_UNAUTHORIZED_HEADERS,
    )


async def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    token_service: Annotated[
        TokenVerificationProtocol | None, Depends(get_token_service)
    ],
) -> CurrentUser:
    """Get current authenticated user from the bearer token.

    Args:
        credentials: Bearer token from Authorization header.
        token_service: Token verifier (injected; None when unconfigured).

    Returns:
        CurrentUser with identity from the verified token.

    Raises:
        HTTPException 401: If token is missing, invalid, or expired, or if
            token verification is not configured.
    """
    if credentials is None:
        raise _unauthorized("Authorization header missing or invalid")

    if token_service is None:
        raise _unauthorized("Token verification is not configured")

    result = token_service.validate_access_token(credentials.credentials)
    if isinstance(result, Failure):
        raise _unauthorized(result.error.message)

    claims = result.value
    subject = claims.get("sub")
    if not subject:
        raise _unauthorized("Invalid token payload")

    return CurrentUser(
        subject=str(subject),
        email=claims.get("email"),
        username=claims.get("username") or claims.get("cognito:username"),
    )


# Type alias for cleaner route signatures
AuthenticatedUser = Annotated[CurrentUser, Depends(get_current_user)]
