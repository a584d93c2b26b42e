"""Local filesystem storage: one directory tree per user."""

from __future__ import annotations

import contextlib
import os
from pathlib import Path
import tempfile

from notmiro_api.adapters.storage.base import FileStorage, NodeInfo, NodeType, StorageBackendError

_USER_FILES_DIR = "files"


def _check_segment(segment: str) -> str:
    if not segment or segment in (".", "..") or "\\" in segment or "\x00" in segment or "/" in segment:
        raise StorageBackendError("Invalid path")
    return segment


class LocalFileStorage(FileStorage):
    """Stores user files under ``<root>/<user_id>/files/``.

    - Path segments are validated; nothing resolves outside the user's folder.
    - Content is UTF-8 text, written to a temp file then replaced.
    - Listings follow ``os.scandir`` order.
    """

    def __init__(self, root: Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def _resolve(self, user_id: str, path: str) -> Path:
        base = self._root / _check_segment(user_id) / _USER_FILES_DIR
        parts = [_check_segment(segment) for segment in path.split("/")] if path else []
        try:
            base.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageBackendError(str(exc)) from exc
        return base.joinpath(*parts)

    def node_exists(self, user_id: str, path: str) -> bool:
        return self._resolve(user_id, path).exists()

    def new_folder(self, user_id: str, path: str) -> None:
        target = self._resolve(user_id, path)
        try:
            target.mkdir(exist_ok=True)
        except OSError as exc:
            raise StorageBackendError(str(exc)) from exc

    def new_file(self, user_id: str, path: str, content: str) -> None:
        # A concurrent creator may have won the race; the later write replaces it.
        self._write(self._resolve(user_id, path), content)

    def get_content(self, user_id: str, path: str) -> str:
        target = self._resolve(user_id, path)
        try:
            return target.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageBackendError(str(exc)) from exc

    def put_content(self, user_id: str, path: str, content: str) -> None:
        target = self._resolve(user_id, path)
        if not target.is_file():
            raise StorageBackendError(f"Node not found: {path}")
        self._write(target, content)

    def delete(self, user_id: str, path: str) -> None:
        target = self._resolve(user_id, path)
        try:
            target.unlink()
        except OSError as exc:
            raise StorageBackendError(str(exc)) from exc

    def get_directory_listing(self, user_id: str, path: str) -> list[NodeInfo]:
        folder = self._resolve(user_id, path)
        try:
            with os.scandir(folder) as entries:
                return [
                    NodeInfo(
                        name=entry.name,
                        type=NodeType.FOLDER if entry.is_dir() else NodeType.FILE,
                        mtime=int(entry.stat().st_mtime),
                    )
                    for entry in entries
                ]
        except OSError as exc:
            raise StorageBackendError(str(exc)) from exc

    @staticmethod
    def _write(target: Path, content: str) -> None:
        try:
            fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=target.name + ".", suffix=".tmp")
        except OSError as exc:
            raise StorageBackendError(str(exc)) from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(content)
            os.replace(tmp_name, target)
        except OSError as exc:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp_name)
            raise StorageBackendError(str(exc)) from exc


__all__ = ["LocalFileStorage"]
