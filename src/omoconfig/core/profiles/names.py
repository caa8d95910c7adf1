"""Profile name validation."""

from __future__ import annotations

from ..errors import ProfileNameError
from .constants import DEFAULT_PROFILE_NAME, PROFILE_NAME_MAX_LENGTH, PROFILE_NAME_RE, RESERVED_PROFILE_NAMES


def validate_profile_name(name: str, *, existing: bool = False) -> None:
    """
    Raise :class:`ProfileNameError` unless ``name`` is a usable profile name.

    ``existing=True`` is for commands that address a profile already on disk;
    it additionally accepts the ``default`` profile created on first save.
    """
    if PROFILE_NAME_RE.fullmatch(name) is None:
        if len(name) == 0 or len(name) > PROFILE_NAME_MAX_LENGTH:
            raise ProfileNameError(name, f"must be between 1 and {PROFILE_NAME_MAX_LENGTH} characters")
        raise ProfileNameError(name, "must contain only letters, numbers, hyphens, and underscores")

    if existing and name == DEFAULT_PROFILE_NAME:
        return
    if name in RESERVED_PROFILE_NAMES:
        raise ProfileNameError(name, "is a reserved name")


def profile_name_problem(name: str | None) -> str | None:
    """Return a prompt-friendly message for an unusable new name, or None."""
    try:
        validate_profile_name(name or "")
    except ProfileNameError as error:
        return f"Profile name {error.reason}"
    return None
