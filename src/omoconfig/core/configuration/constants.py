"""Constants used throughout the configuration subsystem."""

from __future__ import annotations

import logging
from pathlib import Path

BASE_NAME = "oh-my-opencode"
CONFIG_FILE_NAME = f"{BASE_NAME}.json"
PROJECT_CONFIG_DIRNAME = ".opencode"
PROJECT_CONFIG_REL_PATH = Path(PROJECT_CONFIG_DIRNAME) / CONFIG_FILE_NAME

CONFIG_DIR_ENV_VAR = "OMO_CONFIG_DIR"

JSON_INDENT = 2

DEFAULT_VERBOSITY = "quiet"
VERBOSITY_ENV_VAR = "OMO_CONFIG_LOG_LEVEL"
VERBOSITY_PRESETS = {
    "quiet": logging.WARNING,
    "standard": logging.INFO,
    "verbose": logging.DEBUG,
}
