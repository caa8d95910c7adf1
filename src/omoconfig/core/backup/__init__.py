"""Timestamped copies of the configuration taken before it is rewritten."""

from .manager import BackupInfo, cleanup_old_backups, create_backup, list_backups, restore_backup

__all__ = [
    "BackupInfo",
    "cleanup_old_backups",
    "create_backup",
    "list_backups",
    "restore_backup",
]
