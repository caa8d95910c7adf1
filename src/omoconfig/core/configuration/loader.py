"""Read configuration documents from disk."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable
from typing import Any

from ..errors import InvalidConfigError, PermissionDeniedError
from ..utils.fs import file_exists, is_permission_error
from .defaults import default_config
from .models import validate_config

logger = logging.getLogger(__name__)

ConfigValidator = Callable[[Any], dict[str, Any]]


def read_json_file(path: str | os.PathLike[str]) -> Any:
    """Parse JSON at ``path``; malformed content becomes :class:`InvalidConfigError`."""
    try:
        with open(path, encoding="utf-8") as handle:
            return json.load(handle)
    except json.JSONDecodeError as error:
        raise InvalidConfigError(f"Malformed JSON in {os.fspath(path)}: {error}") from error
    except OSError as error:
        if is_permission_error(error):
            raise PermissionDeniedError(os.fspath(path), "read") from error
        raise


def load_config_from_file(
    path: str | os.PathLike[str],
    *,
    validator: ConfigValidator = validate_config,
) -> dict[str, Any] | None:
    """Return the validated document at ``path`` or None when the file is absent."""
    if not file_exists(path):
        return None
    payload = read_json_file(path)
    try:
        return validator(payload)
    except InvalidConfigError as error:
        detail = ", ".join(error.issues) or str(error)
        raise InvalidConfigError(f"{os.fspath(path)}: {detail}", error.issues) from error


def load_config(
    path: str | os.PathLike[str],
    *,
    validator: ConfigValidator = validate_config,
) -> dict[str, Any]:
    """Load the document at ``path``, falling back to the built-in defaults."""
    loaded = load_config_from_file(path, validator=validator)
    if loaded is None:
        logger.debug("No configuration at %s; using defaults", path)
        return default_config()
    return loaded
