"""Mindmap routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from notmiro_api.errors import ApiError
from notmiro_api.routes.dependencies import get_mindmap_store, get_optional_principal, get_save_request
from notmiro_api.schemas.auth import AuthPrincipal
from notmiro_api.schemas.error import ErrorResponse
from notmiro_api.schemas.mindmap import (
    MindmapContentResponse,
    MindmapFile,
    MindmapListResponse,
    SaveMindmapRequest,
    StatusResponse,
)
from notmiro_api.services.mindmaps import MindmapStore

router = APIRouter(prefix="/mindmap", tags=["Mindmaps"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
}
_ERROR_RESPONSES_WITH_404 = {**_ERROR_RESPONSES, 404: {"model": ErrorResponse}}

_SAVE_REQUEST_SCHEMA = SaveMindmapRequest.model_json_schema()
_SAVE_REQUEST_BODY = {
    "required": True,
    "content": {
        "application/json": {"schema": _SAVE_REQUEST_SCHEMA},
        "application/x-www-form-urlencoded": {"schema": _SAVE_REQUEST_SCHEMA},
    },
}


@router.post(
    "/save",
    response_model=StatusResponse,
    responses=_ERROR_RESPONSES,
    openapi_extra={"requestBody": _SAVE_REQUEST_BODY},
)
def save_mindmap(
    payload: Annotated[SaveMindmapRequest, Depends(get_save_request)],
    principal: Annotated[AuthPrincipal | None, Depends(get_optional_principal)],
    store: Annotated[MindmapStore, Depends(get_mindmap_store)],
) -> StatusResponse:
    result = store.save(principal, filename=payload.filename, content=payload.content)
    if not result.ok:
        raise ApiError.from_result(result)
    return StatusResponse()


@router.get("/load", response_model=MindmapContentResponse, responses=_ERROR_RESPONSES_WITH_404)
def load_mindmap(
    filename: Annotated[str, Query()],
    principal: Annotated[AuthPrincipal | None, Depends(get_optional_principal)],
    store: Annotated[MindmapStore, Depends(get_mindmap_store)],
) -> MindmapContentResponse:
    result = store.load(principal, filename=filename)
    if not result.ok:
        raise ApiError.from_result(result)
    return MindmapContentResponse(content=result.content or "")


@router.get("/list", response_model=MindmapListResponse, responses=_ERROR_RESPONSES)
def list_mindmaps(
    principal: Annotated[AuthPrincipal | None, Depends(get_optional_principal)],
    store: Annotated[MindmapStore, Depends(get_mindmap_store)],
) -> MindmapListResponse:
    result = store.list(principal)
    if not result.ok:
        raise ApiError.from_result(result)
    return MindmapListResponse(
        files=[MindmapFile(name=entry.name, mtime=entry.mtime) for entry in result.entries or []],
    )


@router.delete("/delete", response_model=StatusResponse, responses=_ERROR_RESPONSES_WITH_404)
def delete_mindmap(
    filename: Annotated[str, Query()],
    principal: Annotated[AuthPrincipal | None, Depends(get_optional_principal)],
    store: Annotated[MindmapStore, Depends(get_mindmap_store)],
) -> StatusResponse:
    result = store.delete(principal, filename=filename)
    if not result.ok:
        raise ApiError.from_result(result)
    return StatusResponse()
