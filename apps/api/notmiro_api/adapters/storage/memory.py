"""In-memory file storage used by local development and tests."""

from __future__ import annotations

from dataclasses import dataclass, field
import time
from typing import Callable

from notmiro_api.adapters.storage.base import FileStorage, NodeInfo, NodeType, StorageBackendError


def _now() -> int:
    return int(time.time())


def _parent_of(path: str) -> str:
    head, _, _ = path.rpartition("/")
    return head


def _name_of(path: str) -> str:
    return path.rpartition("/")[2]


@dataclass(slots=True)
class _MemoryNode:
    type: NodeType
    mtime: int
    content: str = ""


@dataclass(slots=True)
class InMemoryFileStorage(FileStorage):
    """Deterministic per-user trees kept in dictionaries.

    Every port call is counted in ``call_count`` and recorded in ``calls``.
    While ``failure_message`` is set, matching calls raise ``StorageBackendError``;
    ``failure_operation`` restricts the failure to one operation name.
    """

    trees: dict[str, dict[str, _MemoryNode]] = field(default_factory=dict)
    clock: Callable[[], int] = _now
    call_count: int = 0
    calls: list[tuple[str, str, str]] = field(default_factory=list)
    failure_message: str | None = None
    failure_operation: str | None = None

    def _enter(self, operation: str, user_id: str, path: str) -> dict[str, _MemoryNode]:
        self.call_count += 1
        self.calls.append((operation, user_id, path))
        if self.failure_message is not None and self.failure_operation in (None, operation):
            raise StorageBackendError(self.failure_message)
        return self.trees.setdefault(user_id, {"": _MemoryNode(type=NodeType.FOLDER, mtime=self.clock())})

    def _require(self, tree: dict[str, _MemoryNode], path: str, node_type: NodeType) -> _MemoryNode:
        node = tree.get(path)
        if node is None:
            raise StorageBackendError(f"Node not found: {path}")
        if node.type is not node_type:
            raise StorageBackendError(f"Not a {node_type.value}: {path}")
        return node

    def _create(self, tree: dict[str, _MemoryNode], path: str, node: _MemoryNode) -> None:
        if path in tree:
            raise StorageBackendError(f"Node already exists: {path}")
        parent = self._require(tree, _parent_of(path), NodeType.FOLDER)
        tree[path] = node
        parent.mtime = node.mtime

    def node_exists(self, user_id: str, path: str) -> bool:
        tree = self._enter("node_exists", user_id, path)
        return path in tree

    def new_folder(self, user_id: str, path: str) -> None:
        tree = self._enter("new_folder", user_id, path)
        self._create(tree, path, _MemoryNode(type=NodeType.FOLDER, mtime=self.clock()))

    def new_file(self, user_id: str, path: str, content: str) -> None:
        tree = self._enter("new_file", user_id, path)
        self._create(tree, path, _MemoryNode(type=NodeType.FILE, mtime=self.clock(), content=content))

    def get_content(self, user_id: str, path: str) -> str:
        tree = self._enter("get_content", user_id, path)
        return self._require(tree, path, NodeType.FILE).content

    def put_content(self, user_id: str, path: str, content: str) -> None:
        tree = self._enter("put_content", user_id, path)
        node = self._require(tree, path, NodeType.FILE)
        node.content = content
        node.mtime = self.clock()

    def delete(self, user_id: str, path: str) -> None:
        tree = self._enter("delete", user_id, path)
        self._require(tree, path, NodeType.FILE)
        del tree[path]

    def get_directory_listing(self, user_id: str, path: str) -> list[NodeInfo]:
        tree = self._enter("get_directory_listing", user_id, path)
        self._require(tree, path, NodeType.FOLDER)
        return [
            NodeInfo(name=_name_of(child_path), type=node.type, mtime=node.mtime)
            for child_path, node in tree.items()
            if child_path and _parent_of(child_path) == path
        ]


__all__ = ["InMemoryFileStorage"]
