"""Options accepted both on the root app and on every subcommand."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    help="Path to oh-my-opencode.json. Defaults to the project, git-root or user config.",
)
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Show debug logs and full tracebacks.")


@dataclass(frozen=True, slots=True)
class GlobalOptions:
    config: Path | None = None
    verbose: bool = False


def global_options(ctx: typer.Context, *, config: Path | None = None, verbose: bool = False) -> GlobalOptions:
    """Combine root-level options stored on ``ctx.obj`` with the subcommand's own; the subcommand wins."""
    root = ctx.obj if isinstance(ctx.obj, GlobalOptions) else GlobalOptions()
    return GlobalOptions(config=config or root.config, verbose=verbose or root.verbose)
