"""Mindmap document store service layer."""

from __future__ import annotations

import logging

from notmiro_api.adapters.storage import FileStorage, NodeType
from notmiro_api.core.logging_safety import safe_log_identifier
from notmiro_api.domain.mindmaps import (
    MESSAGE_NO_DOCUMENT,
    MESSAGE_NO_NAMESPACE,
    NAMESPACE_DIR,
    MindmapEntry,
    MindmapResult,
    is_mindmap_name,
    namespace_path,
    normalize_filename,
)
from notmiro_api.schemas.auth import AuthPrincipal

logger = logging.getLogger(__name__)


class MindmapStore:
    """Principal-scoped CRUD over mindmap documents in the ``NotMiro`` folder.

    Operations never raise for backend faults: every exception is logged once
    by type only and returned as a ``STORAGE_ERROR`` result carrying the
    backend message.
    """

    def __init__(self, storage: FileStorage) -> None:
        self._storage = storage

    def save(self, principal: AuthPrincipal | None, *, filename: str, content: str) -> MindmapResult:
        if principal is None:
            return self._unauthenticated("save")

        user_id = principal.user_id
        try:
            if not self._storage.node_exists(user_id, NAMESPACE_DIR):
                self._storage.new_folder(user_id, NAMESPACE_DIR)

            path = namespace_path(normalize_filename(filename))
            if self._storage.node_exists(user_id, path):
                self._storage.put_content(user_id, path, content)
            else:
                self._storage.new_file(user_id, path, content)
        except Exception as exc:
            return self._storage_failure("save", user_id, exc, filename=filename)

        logger.info("mindmap.saved principal_id=%s", safe_log_identifier(user_id, prefix="pid"))
        return MindmapResult.success()

    def load(self, principal: AuthPrincipal | None, *, filename: str) -> MindmapResult:
        if principal is None:
            return self._unauthenticated("load")

        user_id = principal.user_id
        try:
            if not self._storage.node_exists(user_id, NAMESPACE_DIR):
                return MindmapResult.not_found(MESSAGE_NO_NAMESPACE)

            path = namespace_path(normalize_filename(filename))
            if not self._storage.node_exists(user_id, path):
                return MindmapResult.not_found(MESSAGE_NO_DOCUMENT)

            content = self._storage.get_content(user_id, path)
        except Exception as exc:
            return self._storage_failure("load", user_id, exc, filename=filename)

        return MindmapResult.success(content=content)

    def list(self, principal: AuthPrincipal | None) -> MindmapResult:
        if principal is None:
            return self._unauthenticated("list")

        user_id = principal.user_id
        try:
            # First listing provisions the namespace instead of reporting it missing.
            if not self._storage.node_exists(user_id, NAMESPACE_DIR):
                self._storage.new_folder(user_id, NAMESPACE_DIR)
                return MindmapResult.success(entries=[])

            entries = [
                MindmapEntry(name=node.name, mtime=node.mtime)
                for node in self._storage.get_directory_listing(user_id, NAMESPACE_DIR)
                if node.type is NodeType.FILE and is_mindmap_name(node.name)
            ]
        except Exception as exc:
            return self._storage_failure("list", user_id, exc)

        return MindmapResult.success(entries=entries)

    def delete(self, principal: AuthPrincipal | None, *, filename: str) -> MindmapResult:
        if principal is None:
            return self._unauthenticated("delete")

        user_id = principal.user_id
        try:
            if not self._storage.node_exists(user_id, NAMESPACE_DIR):
                return MindmapResult.not_found(MESSAGE_NO_NAMESPACE)

            path = namespace_path(normalize_filename(filename))
            if not self._storage.node_exists(user_id, path):
                return MindmapResult.not_found(MESSAGE_NO_DOCUMENT)

            self._storage.delete(user_id, path)
        except Exception as exc:
            return self._storage_failure("delete", user_id, exc, filename=filename)

        logger.info("mindmap.deleted principal_id=%s", safe_log_identifier(user_id, prefix="pid"))
        return MindmapResult.success()

    @staticmethod
    def _unauthenticated(operation: str) -> MindmapResult:
        logger.warning("mindmap.%s_rejected reason=unauthenticated", operation)
        return MindmapResult.unauthenticated()

    @staticmethod
    def _storage_failure(
        operation: str,
        user_id: str,
        exc: Exception,
        *,
        filename: str | None = None,
    ) -> MindmapResult:
        logger.error(
            "mindmap.%s_failed principal_id=%s document=%s error_type=%s",
            operation,
            safe_log_identifier(user_id, prefix="pid"),
            safe_log_identifier(filename, prefix="doc"),
            type(exc).__name__,
        )
        return MindmapResult.storage_error(str(exc))


__all__ = ["MindmapStore"]
