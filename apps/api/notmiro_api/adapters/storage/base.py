"""Hierarchical file storage interfaces."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class StorageBackendError(Exception):
    """Raised by storage backends for any I/O, permission or path fault."""


class NodeType(str, Enum):
    FILE = "file"
    FOLDER = "folder"


@dataclass(frozen=True, slots=True)
class NodeInfo:
    name: str
    type: NodeType
    mtime: int


class FileStorage(ABC):
    """Per-user file tree.

    Paths are ``/``-joined and relative to the user's root folder.
    """

    @abstractmethod
    def node_exists(self, user_id: str, path: str) -> bool:
        """Return whether a file or folder exists at ``path``."""

    @abstractmethod
    def new_folder(self, user_id: str, path: str) -> None:
        """Create a folder; its parent must already exist."""

    @abstractmethod
    def new_file(self, user_id: str, path: str, content: str) -> None:
        """Create a file holding ``content``."""

    @abstractmethod
    def get_content(self, user_id: str, path: str) -> str:
        """Read a file's full content."""

    @abstractmethod
    def put_content(self, user_id: str, path: str, content: str) -> None:
        """Overwrite an existing file's content."""

    @abstractmethod
    def delete(self, user_id: str, path: str) -> None:
        """Remove a file."""

    @abstractmethod
    def get_directory_listing(self, user_id: str, path: str) -> list[NodeInfo]:
        """Return the direct children of a folder in backend order."""


__all__ = ["FileStorage", "NodeInfo", "NodeType", "StorageBackendError"]
