"""Create, list, restore and prune configuration backups.

Backups sit beside the config as ``<config>.backup.<YYYYMMDD-HHMMSS>`` (UTC).
The timestamp sorts lexically in time order, so the newest backup is simply
the greatest name.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..errors import BackupError, BackupNotFoundError
from ..utils.fs import atomic_write, file_exists, handle_file_error

logger = logging.getLogger(__name__)

BACKUP_INFIX = ".backup."
BACKUP_TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"
BACKUP_TIMESTAMP_RE = re.compile(r"\d{8}-\d{6}")
MAX_BACKUPS = 10


@dataclass(frozen=True, slots=True)
class BackupInfo:
    timestamp: str
    path: Path
    created: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "path": str(self.path),
            "created": self.created.isoformat(),
        }


def backup_path_for(config_path: str | os.PathLike[str], timestamp: str) -> Path:
    path = Path(config_path)
    return path.with_name(f"{path.name}{BACKUP_INFIX}{timestamp}")


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as error:
        handle_file_error(error, path, "read")


def create_backup(config_path: str | os.PathLike[str], *, now: datetime | None = None) -> Path:
    """Copy the current config (through any symlink) to a new timestamped backup."""
    path = Path(config_path)
    if not file_exists(path):
        raise BackupError(f"Cannot back up non-existent config: {path}")

    timestamp = (now or datetime.now(UTC)).strftime(BACKUP_TIMESTAMP_FORMAT)
    backup_path = backup_path_for(path, timestamp)
    atomic_write(backup_path, _read_text(path))
    logger.info("Backed up %s to %s", path, backup_path)
    return backup_path


def list_backups(config_path: str | os.PathLike[str]) -> list[BackupInfo]:
    """Return the backups of ``config_path``, newest first."""
    path = Path(config_path)
    prefix = f"{path.name}{BACKUP_INFIX}"
    try:
        entries = os.listdir(path.parent)
    except (FileNotFoundError, NotADirectoryError):
        return []
    except OSError as error:
        handle_file_error(error, path.parent, "read")

    backups: list[BackupInfo] = []
    for entry in entries:
        if not entry.startswith(prefix):
            continue
        timestamp = entry[len(prefix):]
        if BACKUP_TIMESTAMP_RE.fullmatch(timestamp) is None:
            continue
        backup_path = path.parent / entry
        stats = os.stat(backup_path)
        created = getattr(stats, "st_birthtime", None) or stats.st_mtime
        backups.append(BackupInfo(timestamp, backup_path, datetime.fromtimestamp(created, tz=UTC)))

    backups.sort(key=lambda backup: backup.timestamp, reverse=True)
    return backups


def restore_backup(config_path: str | os.PathLike[str], timestamp: str) -> None:
    """Atomically write backup ``timestamp`` over the config, following its symlink."""
    if BACKUP_TIMESTAMP_RE.fullmatch(timestamp) is None:
        raise BackupNotFoundError(timestamp, f"{os.fspath(config_path)}{BACKUP_INFIX}{timestamp}")
    backup_path = backup_path_for(config_path, timestamp)
    if not file_exists(backup_path):
        raise BackupNotFoundError(timestamp, os.fspath(backup_path))

    atomic_write(config_path, _read_text(backup_path))
    logger.info("Restored %s from backup %s", config_path, timestamp)


def cleanup_old_backups(config_path: str | os.PathLike[str], max_count: int = MAX_BACKUPS) -> list[Path]:
    """Delete all but the newest ``max_count`` backups and return the removed paths."""
    stale = list_backups(config_path)[max_count:]
    for backup in stale:
        try:
            os.unlink(backup.path)
        except FileNotFoundError:
            continue
        except OSError as error:
            handle_file_error(error, backup.path, "delete")
        logger.debug("Pruned backup %s", backup.path)
    return [backup.path for backup in stale]
