"""Mock auth verifier for local development and tests."""

from notmiro_api.adapters.auth.base import AuthVerificationError, TokenVerifier
from notmiro_api.schemas.auth import AuthPrincipal


class MockTokenVerifier(TokenVerifier):
    """Accepts ``test:<user_id>`` or ``test:<user_id>:<role>`` tokens.

    The role segment is ignored; only the user id selects the namespace.
    """

    def verify_token(self, token: str) -> AuthPrincipal:
        parts = token.split(":")
        if len(parts) not in (2, 3) or parts[0] != "test":
            raise AuthVerificationError("Invalid bearer token")

        user_id = parts[1].strip()
        if not user_id:
            raise AuthVerificationError("Bearer token missing user identity")
        return AuthPrincipal(user_id=user_id)


__all__ = ["MockTokenVerifier"]
