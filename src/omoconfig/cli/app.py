"""Root Typer application."""

from __future__ import annotations

from pathlib import Path

import typer

from .commands import backup, config, profile
from .options import CONFIG_OPTION, VERBOSE_OPTION, GlobalOptions

app = typer.Typer(
    name="omo-config",
    help="Manage oh-my-opencode configuration and swappable profiles.",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Path | None = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Manage oh-my-opencode configuration and swappable profiles."""
    ctx.obj = GlobalOptions(config=config_path, verbose=verbose)


profile.register(app)
config.register(app)
backup.register(app)
