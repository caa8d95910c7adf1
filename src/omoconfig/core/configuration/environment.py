"""Environment adapters for applying configuration at runtime."""

from __future__ import annotations

import os
from collections.abc import MutableMapping
from pathlib import Path

from platformdirs import user_config_dir

from .constants import (
    CONFIG_DIR_ENV_VAR,
    CONFIG_FILE_NAME,
    DEFAULT_VERBOSITY,
    VERBOSITY_ENV_VAR,
    VERBOSITY_PRESETS,
)


def normalize_verbosity_label(value: str | None) -> str | None:
    if value is None:
        return None
    label = value.strip().lower()
    if label in VERBOSITY_PRESETS:
        return label
    return None


class EnvironmentManager:
    """Thin wrapper around environment access to aid testing and reuse."""

    def __init__(self, environ: MutableMapping[str, str] | None = None) -> None:
        self._environ = environ if environ is not None else os.environ

    def getenv(self, key: str) -> str | None:
        return self._environ.get(key)

    def user_config_file(self) -> Path:
        override = self.getenv(CONFIG_DIR_ENV_VAR)
        config_dir = Path(override) if override else Path(user_config_dir("opencode", appauthor=False))
        return config_dir / CONFIG_FILE_NAME

    def resolve_log_level(self, *, verbose: bool = False, default: int | None = None) -> int:
        if verbose:
            return VERBOSITY_PRESETS["verbose"]

        label = normalize_verbosity_label(self.getenv(VERBOSITY_ENV_VAR))
        if label is not None:
            return VERBOSITY_PRESETS[label]

        fallback = VERBOSITY_PRESETS[DEFAULT_VERBOSITY]
        return fallback if default is None else default

