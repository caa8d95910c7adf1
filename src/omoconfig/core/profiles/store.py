"""Named configuration profiles and the active-profile symlink.

Profiles live beside the canonical config as ``oh-my-opencode-<name>.json``.
The canonical ``oh-my-opencode.json`` is either a regular file or a symlink to
one profile; which profile is active is always read back from that link and
never stored anywhere else.
"""

from __future__ import annotations

import logging
import os
import stat
from contextlib import suppress
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, NoReturn

from ..configuration.constants import CONFIG_FILE_NAME
from ..configuration.loader import ConfigValidator, load_config_from_file
from ..configuration.models import validate_config
from ..configuration.writer import serialize_config
from ..errors import (
    DanglingSymlinkError,
    InvalidConfigError,
    PermissionDeniedError,
    ProfileActiveError,
    ProfileError,
    ProfileExistsError,
    ProfileNotFoundError,
)
from ..utils.fs import atomic_symlink_update, atomic_write, file_exists, is_permission_error
from ..utils.merge import deep_merge
from .constants import BASE_NAME, DEFAULT_PROFILE_NAME, PROFILE_FILE_RE, PROFILE_TEMPLATE_FILE_NAME
from .names import validate_profile_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProfileInfo:
    name: str
    is_active: bool
    created: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "isActive": self.is_active,
            "created": self.created.isoformat(),
        }


def get_profile_path(config_dir: str | os.PathLike[str], name: str) -> Path:
    return Path(config_dir) / f"{BASE_NAME}-{name}.json"


def get_config_path(config_dir: str | os.PathLike[str]) -> Path:
    return Path(config_dir) / CONFIG_FILE_NAME


def _raise_filesystem_error(error: OSError, path: Path, operation: str, message: str) -> NoReturn:
    if is_permission_error(error):
        raise PermissionDeniedError(os.fspath(path), operation) from error
    raise ProfileError(f"{message}: {error}") from error


def find_profile_names(config_dir: str | os.PathLike[str]) -> list[str]:
    """Return profile names found in ``config_dir`` (unordered); a missing directory has none."""
    directory = Path(config_dir)
    try:
        entries = os.listdir(directory)
    except (FileNotFoundError, NotADirectoryError):
        return []
    except OSError as error:
        _raise_filesystem_error(error, directory, "read", f"Failed to list profiles in {directory}")

    names: list[str] = []
    for entry in entries:
        match = PROFILE_FILE_RE.fullmatch(entry)
        if match is not None:
            names.append(match.group("name"))
    return names


def resolve_active_profile_name(config_dir: str | os.PathLike[str]) -> str | None:
    """
    Derive the active profile from the canonical config path.

    Returns None when the canonical path is missing, a regular file, or a
    symlink to something that is not a profile file. A symlink whose target
    is gone raises :class:`DanglingSymlinkError`.
    """
    config_path = get_config_path(config_dir)
    try:
        stats = os.lstat(config_path)
    except FileNotFoundError:
        return None
    except OSError as error:
        _raise_filesystem_error(error, config_path, "read", f"Failed to inspect {config_path}")

    if not stat.S_ISLNK(stats.st_mode):
        return None

    try:
        target = os.readlink(config_path)
    except OSError as error:
        _raise_filesystem_error(error, config_path, "read", f"Failed to read symlink {config_path}")

    if not file_exists(config_path.parent / target):
        raise DanglingSymlinkError(target)

    match = PROFILE_FILE_RE.fullmatch(Path(target).name)
    if match is None:
        logger.debug("Config symlink %s points outside the profile set: %s", config_path, target)
        return None
    return match.group("name")


def _profile_created(path: Path) -> datetime:
    try:
        stats = os.stat(path)
    except OSError as error:
        _raise_filesystem_error(error, path, "read", f"Failed to inspect profile {path}")
    # mtime survives a rename; ctime does not.
    timestamp = getattr(stats, "st_birthtime", None) or stats.st_mtime
    return datetime.fromtimestamp(timestamp, tz=UTC)


def resolve_template_path(
    config_dir: str | os.PathLike[str],
    *,
    config_path: str | os.PathLike[str] | None = None,
    template_path: str | os.PathLike[str] | None = None,
) -> Path | None:
    """Explicit template if it exists, else the template beside the canonical config."""
    if template_path and file_exists(template_path):
        return Path(template_path)

    canonical = Path(config_path) if config_path else get_config_path(config_dir)
    fallback = canonical.parent / PROFILE_TEMPLATE_FILE_NAME
    if file_exists(fallback):
        return fallback
    return None


def _load_document(path: Path, validator: ConfigValidator) -> dict[str, Any] | None:
    try:
        return load_config_from_file(path, validator=validator)
    except OSError as error:
        _raise_filesystem_error(error, path, "read", f"Failed to read {path}")


def _apply_template(template: dict[str, Any], config: dict[str, Any], validator: ConfigValidator) -> dict[str, Any]:
    merged = deep_merge(template, config)
    try:
        return validator(merged)
    except InvalidConfigError as error:
        detail = ", ".join(error.issues) or str(error)
        raise InvalidConfigError(f"Template merge failed: {detail}", error.issues) from error


def _write_profile(path: Path, document: dict[str, Any]) -> None:
    try:
        atomic_write(path, serialize_config(document))
    except OSError as error:
        _raise_filesystem_error(error, path, "write", f"Failed to write profile {path}")


def save_profile(
    config_dir: str | os.PathLike[str],
    name: str,
    config: dict[str, Any],
    *,
    config_path: str | os.PathLike[str] | None = None,
    template_path: str | os.PathLike[str] | None = None,
    validator: ConfigValidator = validate_config,
) -> Path:
    """
    Persist ``config`` as profile ``name``, merged over the template when one exists.

    The first save into a directory without profiles also snapshots the
    current canonical config (or, failing that, the saved document) as the
    ``default`` profile. Saving an existing name overwrites it.
    """
    validate_profile_name(name)
    directory = Path(config_dir)

    try:
        validated = validator(config)
    except InvalidConfigError as error:
        detail = ", ".join(error.issues) or str(error)
        raise InvalidConfigError(f"Config validation failed: {detail}", error.issues) from error

    resolved_template = resolve_template_path(directory, config_path=config_path, template_path=template_path)
    template = _load_document(resolved_template, validator) if resolved_template is not None else None
    if template is not None:
        logger.debug("Merging profile %s over template %s", name, resolved_template)
        output = _apply_template(template, validated, validator)
    else:
        output = validated

    if not find_profile_names(directory) and name != DEFAULT_PROFILE_NAME:
        canonical = Path(config_path) if config_path else get_config_path(directory)
        current = _load_document(canonical, validator)
        if current is None:
            default_document = output
        elif template is not None:
            default_document = _apply_template(template, current, validator)
        else:
            default_document = current
        _write_profile(get_profile_path(directory, DEFAULT_PROFILE_NAME), default_document)
        source = canonical if current is not None else "the saved config"
        logger.info("Created %r profile from %s", DEFAULT_PROFILE_NAME, source)

    profile_path = get_profile_path(directory, name)
    _write_profile(profile_path, output)
    logger.info("Saved profile %r to %s", name, profile_path)
    return profile_path


def use_profile(config_dir: str | os.PathLike[str], name: str) -> None:
    """Make ``name`` the active profile by repointing the canonical config symlink."""
    validate_profile_name(name, existing=True)

    profile_path = get_profile_path(config_dir, name)
    if not file_exists(profile_path):
        raise ProfileNotFoundError(name)

    config_path = get_config_path(config_dir)
    try:
        atomic_symlink_update(profile_path.absolute(), config_path)
    except OSError as error:
        raise ProfileError(f'Failed to switch to profile "{name}": {error}') from error
    logger.info("Activated profile %r", name)


def list_profiles(config_dir: str | os.PathLike[str]) -> list[ProfileInfo]:
    """
    Return all profiles, oldest first, flagging the active one.

    Age is the file's birth time where the platform records one, else its
    mtime. Either way a rename keeps a profile in place, while saving over a
    profile makes it the newest.
    """
    names = find_profile_names(config_dir)
    active_name = resolve_active_profile_name(config_dir)

    profiles = [
        ProfileInfo(
            name=name,
            is_active=name == active_name,
            created=_profile_created(get_profile_path(config_dir, name)),
        )
        for name in names
    ]
    profiles.sort(key=lambda profile: (profile.created, profile.name))
    return profiles


def delete_profile(config_dir: str | os.PathLike[str], name: str) -> None:
    """Remove profile ``name``; the active profile can never be deleted."""
    validate_profile_name(name, existing=True)

    profile_path = get_profile_path(config_dir, name)
    if not file_exists(profile_path):
        raise ProfileNotFoundError(name)

    if resolve_active_profile_name(config_dir) == name:
        raise ProfileActiveError(name)

    try:
        os.unlink(profile_path)
    except OSError as error:
        _raise_filesystem_error(error, profile_path, "delete", f'Failed to delete profile "{name}"')
    logger.info("Deleted profile %r", name)


def rename_profile(config_dir: str | os.PathLike[str], old_name: str, new_name: str) -> None:
    """
    Rename a profile, keeping the canonical symlink on it when it is active.

    The file rename and the symlink repoint are two separate steps. If the
    repoint fails the rename is reverted on a best-effort basis; should the
    revert fail too, the canonical symlink is left dangling until fixed by hand.
    """
    validate_profile_name(old_name, existing=True)
    validate_profile_name(new_name)

    old_path = get_profile_path(config_dir, old_name)
    new_path = get_profile_path(config_dir, new_name)

    if not file_exists(old_path):
        raise ProfileNotFoundError(old_name)
    if os.path.lexists(new_path):
        raise ProfileExistsError(new_name)

    was_active = resolve_active_profile_name(config_dir) == old_name

    try:
        os.rename(old_path, new_path)
    except OSError as error:
        _raise_filesystem_error(
            error, old_path, "rename", f'Failed to rename profile "{old_name}" to "{new_name}"'
        )

    if was_active:
        try:
            atomic_symlink_update(new_path.absolute(), get_config_path(config_dir))
        except (OSError, PermissionDeniedError) as error:
            with suppress(OSError):
                os.rename(new_path, old_path)
            if file_exists(new_path):
                logger.warning("Could not restore %s after failed symlink update; symlink is dangling", old_path)
            raise ProfileError(f"Failed to update active profile symlink after rename: {error}") from error

    logger.info("Renamed profile %r to %r", old_name, new_name)
