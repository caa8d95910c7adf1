"""Shared constants for profile name validation and file handling."""

from __future__ import annotations

import re

from ..configuration.constants import BASE_NAME

PROFILE_NAME_MAX_LENGTH = 32
PROFILE_NAME_PATTERN = rf"[A-Za-z0-9_-]{{1,{PROFILE_NAME_MAX_LENGTH}}}"
PROFILE_NAME_RE = re.compile(PROFILE_NAME_PATTERN)
# Matched with fullmatch against bare file names inside the config directory.
PROFILE_FILE_RE = re.compile(rf"{re.escape(BASE_NAME)}-(?P<name>{PROFILE_NAME_PATTERN})\.json")

DEFAULT_PROFILE_NAME = "default"
RESERVED_PROFILE_NAMES = frozenset({DEFAULT_PROFILE_NAME, "backup", "temp", "current", BASE_NAME})

PROFILE_TEMPLATE_FILE_NAME = f"{BASE_NAME}.template.json"
