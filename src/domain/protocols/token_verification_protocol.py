"""Token verification protocol.

Port used by the authentication dependency to turn a bearer token into
verified claims. Implemented by CognitoTokenService.
"""

from typing import Any, Protocol

from src.core.errors import AuthenticationError
from src.core.result import Result


class TokenVerificationProtocol(Protocol):
    """Verify a bearer token and expose its claims."""

    def validate_access_token(
        self,
        token: str,
    ) -> Result[dict[str, Any], AuthenticationError]:
        """Return verified claims, or an AuthenticationError."""
        ...
