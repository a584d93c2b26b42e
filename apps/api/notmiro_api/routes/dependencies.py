"""Dependency wiring for routes."""

from __future__ import annotations

import logging
from typing import Annotated
from uuid import uuid4

from fastapi import Depends, Request, Security
from fastapi.exceptions import RequestValidationError
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError

from notmiro_api.adapters.auth import (
    AuthVerificationError,
    FirebaseTokenVerifier,
    MockTokenVerifier,
    TokenVerifier,
)
from notmiro_api.adapters.storage import FileStorage
from notmiro_api.core.config import Settings, get_settings
from notmiro_api.core.logging_safety import safe_log_identifier
from notmiro_api.schemas.auth import AuthPrincipal
from notmiro_api.schemas.mindmap import SaveMindmapRequest
from notmiro_api.services.mindmaps import MindmapStore

bearer_scheme = HTTPBearer(auto_error=False, scheme_name="bearerAuth")
logger = logging.getLogger(__name__)


def _request_correlation_id(request: Request) -> str:
    existing = getattr(request.state, "correlation_id", None)
    if isinstance(existing, str) and existing:
        return existing

    correlation_id = request.headers.get("X-Correlation-Id") or f"req-{uuid4()}"
    request.state.correlation_id = correlation_id
    return correlation_id


def get_request_correlation_id(request: Request) -> str:
    return _request_correlation_id(request)


def get_token_verifier(settings: Annotated[Settings, Depends(get_settings)]) -> TokenVerifier:
    """Resolve provider adapter from configuration."""
    if settings.auth_provider == "firebase":
        return FirebaseTokenVerifier(
            project_id=settings.firebase_project_id,
            audience=settings.firebase_audience,
        )
    return MockTokenVerifier()


async def get_optional_principal(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Security(bearer_scheme)],
    verifier: Annotated[TokenVerifier, Depends(get_token_verifier)],
) -> AuthPrincipal | None:
    """Resolve the current user, or ``None`` when no valid bearer token is present.

    Rejection is left to the mindmap store so that every operation reports
    an unauthenticated caller the same way.
    """
    safe_correlation_id = safe_log_identifier(_request_correlation_id(request), prefix="cid")
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        logger.warning(
            "auth.rejected correlation_id=%s method=%s path=%s reason=invalid_or_missing_bearer",
            safe_correlation_id,
            request.method,
            request.url.path,
        )
        return None

    try:
        principal = verifier.verify_token(credentials.credentials)
    except AuthVerificationError:
        logger.warning(
            "auth.rejected correlation_id=%s method=%s path=%s reason=token_verification_failed",
            safe_correlation_id,
            request.method,
            request.url.path,
        )
        return None

    logger.info(
        "auth.accepted correlation_id=%s method=%s path=%s principal_id=%s",
        safe_correlation_id,
        request.method,
        request.url.path,
        safe_log_identifier(principal.user_id, prefix="pid"),
    )
    request.state.auth_principal = principal
    return principal


def get_storage(request: Request) -> FileStorage:
    return request.app.state.storage


def get_mindmap_store(storage: Annotated[FileStorage, Depends(get_storage)]) -> MindmapStore:
    return MindmapStore(storage)


_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def get_save_request(request: Request) -> SaveMindmapRequest:
    """Read ``filename`` and ``content`` from a JSON or form-encoded body."""
    content_type = request.headers.get("content-type", "").lower()
    try:
        if content_type.startswith(_FORM_CONTENT_TYPES):
            form = await request.form()
            data = dict(form)
        else:
            data = await request.json()
        return SaveMindmapRequest.model_validate(data)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc
    except ValueError as exc:
        raise RequestValidationError(
            [{"type": "json_invalid", "loc": ("body",), "msg": "Request body is not valid JSON", "input": None}]
        ) from exc
