"""Firebase Auth token verifier adapter."""

from __future__ import annotations

from typing import Any

from notmiro_api.adapters.auth.base import AuthVerificationError, TokenVerifier
from notmiro_api.schemas.auth import AuthPrincipal


def _firebase_auth_module() -> Any:
    try:
        import firebase_admin
        from firebase_admin import auth as firebase_auth
    except ImportError as exc:  # pragma: no cover - depends on optional package
        raise AuthVerificationError("Firebase auth verifier is unavailable") from exc

    if not firebase_admin._apps:
        firebase_admin.initialize_app()
    return firebase_auth


class FirebaseTokenVerifier(TokenVerifier):
    """Verifies Firebase ID tokens; the Firebase uid becomes the mindmap owner."""

    def __init__(self, project_id: str | None, audience: str | None) -> None:
        self._project_id = project_id
        self._audience = audience

    def verify_token(self, token: str) -> AuthPrincipal:
        firebase_auth = _firebase_auth_module()
        try:
            claims = firebase_auth.verify_id_token(token, check_revoked=True)
        except Exception as exc:  # pragma: no cover - provider exception surface
            raise AuthVerificationError("Invalid bearer token") from exc

        self._check_claims(claims)

        user_id = str(claims.get("uid") or claims.get("sub") or "").strip()
        if not user_id:
            raise AuthVerificationError("Bearer token missing user identity")
        return AuthPrincipal(user_id=user_id)

    def _check_claims(self, claims: dict[str, Any]) -> None:
        audience = str(claims.get("aud", ""))
        if self._audience and audience != self._audience:
            raise AuthVerificationError("Invalid bearer token audience")
        if self._project_id and self._project_id not in str(claims.get("iss", "")) and audience != self._project_id:
            raise AuthVerificationError("Invalid bearer token issuer")


__all__ = ["FirebaseTokenVerifier"]
