"""Locate the configuration file a command should operate on."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable
from pathlib import Path

from .constants import PROJECT_CONFIG_REL_PATH
from .environment import EnvironmentManager

logger = logging.getLogger(__name__)


def find_git_root(cwd: Path) -> Path | None:
    try:
        completed = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError:
        return None
    if completed.returncode != 0:
        return None
    output = completed.stdout.strip()
    return Path(output) if output else None


def discover_config_path(
    *,
    cwd: Path | None = None,
    user_config_file: Path | None = None,
    exists: Callable[[Path], bool] = Path.exists,
    git_root: Callable[[Path], Path | None] = find_git_root,
) -> Path | None:
    """
    Return the first existing config among the project, git-root and user locations.

    Lookup order:
    - ``<cwd>/.opencode/oh-my-opencode.json``
    - ``<git root>/.opencode/oh-my-opencode.json``
    - the user config file (``$OMO_CONFIG_DIR`` or the platform config dir)
    """
    working_dir = cwd or Path.cwd()
    user_file = user_config_file or EnvironmentManager().user_config_file()

    project_candidate = working_dir / PROJECT_CONFIG_REL_PATH
    if exists(project_candidate):
        return project_candidate

    root = git_root(working_dir)
    if root is not None:
        git_candidate = root / PROJECT_CONFIG_REL_PATH
        if exists(git_candidate):
            return git_candidate

    if exists(user_file):
        return user_file
    return None


def resolve_config_path(
    config_option: str | Path | None = None,
    *,
    discover: Callable[[], Path | None] | None = None,
    user_config_file: Path | None = None,
) -> Path:
    """Explicit option, else a discovered config, else the user config path."""
    if config_option:
        return Path(config_option).expanduser()

    discovered = (discover or discover_config_path)()
    if discovered is not None:
        logger.debug("Using discovered config at %s", discovered)
        return discovered
    return user_config_file or EnvironmentManager().user_config_file()
