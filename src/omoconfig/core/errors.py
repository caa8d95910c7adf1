"""Typed errors raised by the configuration and profile core."""

from __future__ import annotations

from collections.abc import Iterable


class OmoConfigError(Exception):
    """Base class for every error surfaced to command handlers."""


class PermissionDeniedError(OmoConfigError):
    def __init__(self, path: str, operation: str) -> None:
        self.path = path
        self.operation = operation
        super().__init__(
            f"Permission denied: Cannot {operation} {path}. Try running with sudo or fixing permissions."
        )


class ConcurrentModificationError(OmoConfigError):
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Concurrent modification detected for {path}. Please try again.")


class InvalidConfigError(OmoConfigError):
    def __init__(self, message: str, issues: Iterable[str] = ()) -> None:
        self.issues = tuple(issues)
        super().__init__(f"Invalid configuration: {message}")


class ProfileError(OmoConfigError):
    """Generic profile failure; also wraps unexpected filesystem errors."""


class ProfileNameError(ProfileError):
    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f'Invalid profile name "{name}": {reason}')


class ProfileNotFoundError(ProfileError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'Profile "{name}" not found')


class ProfileExistsError(ProfileError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'Profile "{name}" already exists')


class ProfileActiveError(ProfileError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'Cannot delete active profile "{name}". Switch to another profile first.')


class DanglingSymlinkError(ProfileError):
    def __init__(self, target_path: str) -> None:
        self.target_path = target_path
        super().__init__(
            f'Dangling symlink detected: target "{target_path}" no longer exists. Please fix manually.'
        )


class BackupError(OmoConfigError):
    """Creating, listing or restoring a config backup failed."""


class BackupNotFoundError(BackupError):
    def __init__(self, timestamp: str, path: str) -> None:
        self.timestamp = timestamp
        self.path = path
        super().__init__(f"Backup not found: {path}")
