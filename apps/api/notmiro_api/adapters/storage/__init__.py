"""File storage adapters."""

from .base import FileStorage, NodeInfo, NodeType, StorageBackendError
from .local import LocalFileStorage
from .memory import InMemoryFileStorage

__all__ = [
    "FileStorage",
    "NodeInfo",
    "NodeType",
    "StorageBackendError",
    "InMemoryFileStorage",
    "LocalFileStorage",
]
