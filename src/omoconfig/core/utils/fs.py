"""Crash-safe filesystem primitives shared by the config writer and profile store.

Writes go to ``<target>.tmp`` beside the real file and are moved into place
with :func:`os.replace`, so readers never observe a partially written document.
When the destination is a symlink (the active-profile link), the chain is
followed and only the final file is replaced; the links themselves survive.
"""

from __future__ import annotations

import errno
import logging
import os
import stat
from contextlib import suppress
from pathlib import Path
from typing import NoReturn

from ..errors import PermissionDeniedError

logger = logging.getLogger(__name__)

MAX_SYMLINK_HOPS = 40
TEMP_SUFFIX = ".tmp"
TEMP_LINK_SUFFIX = ".tmp.link"

_PERMISSION_ERRNOS = frozenset({errno.EACCES, errno.EPERM})


def file_exists(path: str | os.PathLike[str]) -> bool:
    """Return True when ``path`` exists; dangling symlinks count as missing."""
    return os.path.exists(path)


def get_file_mtime(path: str | os.PathLike[str]) -> float | None:
    try:
        return os.stat(path).st_mtime
    except OSError:
        return None


def is_permission_error(error: BaseException) -> bool:
    return isinstance(error, OSError) and error.errno in _PERMISSION_ERRNOS


def handle_file_error(error: BaseException, path: str | os.PathLike[str], operation: str) -> NoReturn:
    """Re-raise ``error``, mapping EACCES/EPERM to :class:`PermissionDeniedError`."""
    if is_permission_error(error):
        raise PermissionDeniedError(os.fspath(path), operation) from error
    raise error


def _temp_sibling(path: Path, suffix: str) -> Path:
    return path.with_name(f"{path.name}{suffix}")


def resolve_write_path(path: str | os.PathLike[str]) -> Path:
    """
    Follow the symlink chain starting at ``path`` and return the file to write.

    A missing hop is returned as-is so the write creates a regular file there.
    Loops and chains longer than ``MAX_SYMLINK_HOPS`` raise ``OSError(ELOOP)``.
    """
    origin = Path(path)
    current = origin
    visited = {os.path.normpath(os.path.abspath(current))}
    hops = 0

    while True:
        try:
            stats = os.lstat(current)
        except FileNotFoundError:
            return current
        if not stat.S_ISLNK(stats.st_mode):
            return current
        if hops >= MAX_SYMLINK_HOPS:
            raise OSError(
                errno.ELOOP,
                f"Too many levels of symbolic links (more than {MAX_SYMLINK_HOPS})",
                os.fspath(origin),
            )
        hops += 1

        target = os.readlink(current)
        next_hop = Path(os.path.normpath(os.path.join(os.path.dirname(os.path.abspath(current)), target)))
        key = os.fspath(next_hop)
        if key in visited:
            raise OSError(errno.ELOOP, f"Symlink loop detected while resolving {origin}", os.fspath(origin))
        visited.add(key)
        logger.debug("Following symlink %s -> %s", current, next_hop)
        current = next_hop


def atomic_write(path: str | os.PathLike[str], content: str) -> Path:
    """Write ``content`` to the real target of ``path`` via temp file + rename."""
    temporary_path: Path | None = None
    try:
        write_path = resolve_write_path(path)
        temporary_path = _temp_sibling(write_path, TEMP_SUFFIX)
        write_path.parent.mkdir(parents=True, exist_ok=True)
        with temporary_path.open("w", encoding="utf-8") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temporary_path, write_path)
    except Exception as error:
        if temporary_path is not None:
            with suppress(OSError):
                temporary_path.unlink()
        handle_file_error(error, path, "write")

    logger.debug("Wrote %d characters to %s", len(content), write_path)
    return write_path


def atomic_symlink_update(target_path: str | os.PathLike[str], link_path: str | os.PathLike[str]) -> None:
    """Point ``link_path`` at ``target_path`` by renaming a fresh symlink over it."""
    link = Path(link_path)
    temporary_link = _temp_sibling(link, TEMP_LINK_SUFFIX)
    try:
        # Left behind by an interrupted switch.
        with suppress(FileNotFoundError):
            os.unlink(temporary_link)
        os.symlink(os.fspath(target_path), temporary_link)
        os.replace(temporary_link, link)
    except OSError as error:
        with suppress(OSError):
            os.unlink(temporary_link)
        handle_file_error(error, link, "create symlink")

    logger.debug("Symlink %s now points at %s", link, target_path)
