"""FastAPI application entrypoint."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse

from notmiro_api.adapters.storage import FileStorage, InMemoryFileStorage, LocalFileStorage
from notmiro_api.core.config import Settings, get_settings
from notmiro_api.errors import ApiError
from notmiro_api.routes import mindmaps_router
from notmiro_api.schemas.error import ErrorResponse

API_PREFIX = "/api"

_OPENAPI_RESPONSE_CODES: dict[str, dict[str, set[str]]] = {
    "/api/mindmap/save": {"post": {"200", "400", "403"}},
    "/api/mindmap/load": {"get": {"200", "400", "403", "404"}},
    "/api/mindmap/list": {"get": {"200", "400", "403"}},
    "/api/mindmap/delete": {"delete": {"200", "400", "403", "404"}},
}

_MINDMAP_ROUTE_PREFIX = f"{API_PREFIX}/mindmap/"


def _apply_contract_response_codes(schema: dict) -> None:
    """Limit documented response codes to the mindmap API contract."""
    for path, methods in _OPENAPI_RESPONSE_CODES.items():
        path_item = schema.get("paths", {}).get(path)
        if not path_item:
            continue

        for method, allowed_codes in methods.items():
            operation = path_item.get(method)
            if not operation:
                continue

            responses = operation.setdefault("responses", {})
            for status_code in list(responses.keys()):
                if status_code not in allowed_codes:
                    responses.pop(status_code, None)

            for status_code in sorted(allowed_codes):
                responses.setdefault(status_code, {"description": "See API contract"})


def build_storage(settings: Settings) -> FileStorage:
    """Create the storage backend named by configuration."""
    if settings.storage_backend == "memory":
        return InMemoryFileStorage()
    return LocalFileStorage(settings.storage_root)


def create_app(storage: FileStorage | None = None) -> FastAPI:
    app = FastAPI(title="NotMiro API", version="0.1.0")
    app.state.storage = storage if storage is not None else build_storage(get_settings())

    @app.exception_handler(ApiError)
    async def handle_api_error(_, exc: ApiError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.payload.model_dump(mode="json"),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Mindmap routes answer bad parameters inside the status envelope.
        if request.url.path.startswith(_MINDMAP_ROUTE_PREFIX):
            payload = ErrorResponse(message="Invalid request payload")
            return JSONResponse(status_code=400, content=payload.model_dump())

        return await request_validation_exception_handler(request, exc)

    app.include_router(mindmaps_router, prefix=API_PREFIX)

    def custom_openapi() -> dict:
        if app.openapi_schema:
            return app.openapi_schema
        schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )
        _apply_contract_response_codes(schema)
        app.openapi_schema = schema
        return app.openapi_schema

    app.openapi = custom_openapi

    return app


app = create_app()
