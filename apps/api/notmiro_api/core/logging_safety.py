"""Helpers that keep user identifiers and document names out of log lines."""

from __future__ import annotations

import hashlib
from typing import Any

_DIGEST_LENGTH = 12


def safe_log_identifier(value: Any, *, prefix: str) -> str:
    """Return ``<prefix>-<sha256 prefix>`` for ``value``, or ``<prefix>-missing`` when blank."""
    text = "" if value is None else str(value).strip()
    if not text:
        return f"{prefix}-missing"
    return f"{prefix}-{hashlib.sha256(text.encode('utf-8')).hexdigest()[:_DIGEST_LENGTH]}"
