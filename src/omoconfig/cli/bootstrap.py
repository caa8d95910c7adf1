"""Per-invocation runtime setup shared by every command."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from omoconfig.core.configuration.environment import EnvironmentManager

PACKAGE_LOGGER = "omoconfig"


@dataclass(frozen=True, slots=True)
class RuntimeContext:
    console: Console
    environment: EnvironmentManager
    verbose: bool = False


def _load_env_files() -> None:
    env_path = Path(".env")
    if env_path.exists():
        load_dotenv(env_path)


def configure_logging(level: int) -> None:
    """Route package logs through a single rich handler on stderr."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=level <= logging.DEBUG,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)


def bootstrap_runtime(*, verbose: bool = False) -> RuntimeContext:
    _load_env_files()
    environment = EnvironmentManager()
    configure_logging(environment.resolve_log_level(verbose=verbose))
    return RuntimeContext(console=Console(), environment=environment, verbose=verbose)
