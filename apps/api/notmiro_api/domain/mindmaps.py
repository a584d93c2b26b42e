"""Mindmap naming rules and store result types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

NAMESPACE_DIR = "NotMiro"
MINDMAP_SUFFIX = ".mindmap"

MESSAGE_UNAUTHENTICATED = "User not logged in"
MESSAGE_NO_NAMESPACE = "No mindmaps found"
MESSAGE_NO_DOCUMENT = "Mindmap not found"


def normalize_filename(filename: str) -> str:
    """Append the ``.mindmap`` suffix unless the name already ends with it.

    The comparison is case-sensitive: ``"a.MINDMAP"`` becomes ``"a.MINDMAP.mindmap"``.
    """
    if filename.endswith(MINDMAP_SUFFIX):
        return filename
    return filename + MINDMAP_SUFFIX


def is_mindmap_name(name: str) -> bool:
    return name.endswith(MINDMAP_SUFFIX)


def namespace_path(stored_name: str) -> str:
    return f"{NAMESPACE_DIR}/{stored_name}"


class MindmapErrorKind(str, Enum):
    UNAUTHENTICATED = "UNAUTHENTICATED"
    NOT_FOUND = "NOT_FOUND"
    STORAGE_ERROR = "STORAGE_ERROR"


@dataclass(frozen=True, slots=True)
class MindmapEntry:
    name: str
    mtime: int


@dataclass(frozen=True, slots=True)
class MindmapResult:
    """Outcome of a store operation; failures carry a kind and a message."""

    ok: bool
    error: MindmapErrorKind | None = None
    message: str | None = None
    content: str | None = None
    entries: list[MindmapEntry] | None = None

    @classmethod
    def success(
        cls,
        *,
        content: str | None = None,
        entries: list[MindmapEntry] | None = None,
    ) -> MindmapResult:
        return cls(ok=True, content=content, entries=entries)

    @classmethod
    def failure(cls, error: MindmapErrorKind, message: str) -> MindmapResult:
        return cls(ok=False, error=error, message=message)

    @classmethod
    def unauthenticated(cls) -> MindmapResult:
        return cls.failure(MindmapErrorKind.UNAUTHENTICATED, MESSAGE_UNAUTHENTICATED)

    @classmethod
    def not_found(cls, message: str) -> MindmapResult:
        return cls.failure(MindmapErrorKind.NOT_FOUND, message)

    @classmethod
    def storage_error(cls, message: str) -> MindmapResult:
        return cls.failure(MindmapErrorKind.STORAGE_ERROR, message)
