"""Named configuration profiles backed by the canonical config symlink."""

from .names import validate_profile_name
from .store import (
    ProfileInfo,
    delete_profile,
    get_config_path,
    get_profile_path,
    list_profiles,
    rename_profile,
    resolve_active_profile_name,
    save_profile,
    use_profile,
)

__all__ = [
    "ProfileInfo",
    "delete_profile",
    "get_config_path",
    "get_profile_path",
    "list_profiles",
    "rename_profile",
    "resolve_active_profile_name",
    "save_profile",
    "use_profile",
    "validate_profile_name",
]
