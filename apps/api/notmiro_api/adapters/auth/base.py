"""Authentication provider interfaces."""

from abc import ABC, abstractmethod

from notmiro_api.schemas.auth import AuthPrincipal


class AuthVerificationError(Exception):
    """Raised when a bearer token does not identify a user."""


class TokenVerifier(ABC):
    """Turns a bearer token into the principal that owns a mindmap namespace."""

    @abstractmethod
    def verify_token(self, token: str) -> AuthPrincipal:
        """Verify ``token`` or raise ``AuthVerificationError``."""


__all__ = ["AuthVerificationError", "TokenVerifier"]
