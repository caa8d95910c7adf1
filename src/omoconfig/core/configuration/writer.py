"""Persist configuration documents with optimistic concurrency control."""

from __future__ import annotations

import json
import logging
import os
from typing import Any

from ..errors import ConcurrentModificationError
from ..utils.fs import atomic_write
from .constants import JSON_INDENT

logger = logging.getLogger(__name__)


def serialize_config(config: dict[str, Any]) -> str:
    return json.dumps(config, indent=JSON_INDENT, ensure_ascii=False)


def save_config(
    path: str | os.PathLike[str],
    config: dict[str, Any],
    *,
    expected_mtime: float | None = None,
) -> None:
    """
    Write ``config`` to ``path`` atomically.

    When ``expected_mtime`` is given (the mtime captured when the document was
    loaded), a file modified after that instant raises
    :class:`ConcurrentModificationError` and nothing is written. A file that
    cannot be stat-ed, usually because it does not exist yet, is not a conflict.
    """
    if expected_mtime is not None:
        try:
            current_mtime = os.stat(path).st_mtime
        except OSError:
            current_mtime = None
        if current_mtime is not None and current_mtime > expected_mtime:
            logger.debug("Refusing to write %s: mtime %s > expected %s", path, current_mtime, expected_mtime)
            raise ConcurrentModificationError(os.fspath(path))

    atomic_write(path, serialize_config(config))
