"""Configuration loading, validation and persistence."""

from .loader import load_config, load_config_from_file, read_json_file
from .models import validate_config
from .resolve import discover_config_path, resolve_config_path
from .writer import save_config, serialize_config

__all__ = [
    "discover_config_path",
    "load_config",
    "load_config_from_file",
    "read_json_file",
    "resolve_config_path",
    "save_config",
    "serialize_config",
    "validate_config",
]
