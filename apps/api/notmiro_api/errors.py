"""Application exception types."""

from notmiro_api.domain.mindmaps import MindmapErrorKind, MindmapResult
from notmiro_api.schemas.error import ErrorResponse

_STATUS_BY_KIND: dict[MindmapErrorKind, int] = {
    MindmapErrorKind.UNAUTHENTICATED: 403,
    MindmapErrorKind.NOT_FOUND: 404,
    MindmapErrorKind.STORAGE_ERROR: 400,
}


class ApiError(Exception):
    """Structured API error rendered as a ``{"status": "error", "message": ...}`` body."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.payload = ErrorResponse(message=message)
        super().__init__(message)

    @classmethod
    def from_result(cls, result: MindmapResult) -> "ApiError":
        if result.error is None:
            raise ValueError("Successful result cannot be converted to an error")
        return cls(status_code=_STATUS_BY_KIND[result.error], message=result.message or "")


__all__ = ["ApiError"]
