"""Implementation of the `config` command group."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

import typer
from rich.markup import escape

from omoconfig.core.backup import cleanup_old_backups, create_backup
from omoconfig.core.configuration import load_config, resolve_config_path, save_config, serialize_config
from omoconfig.core.configuration.models import validate_config
from omoconfig.core.errors import OmoConfigError
from omoconfig.core.utils.fs import file_exists, get_file_mtime

from ..bootstrap import bootstrap_runtime
from ..errors import handle_error
from ..options import CONFIG_OPTION, VERBOSE_OPTION, global_options

KIND_ARGUMENT = typer.Argument(..., help="Whether NAME is an agent or a category.")
ENTRY_NAME_ARGUMENT = typer.Argument(..., help="Agent or category name.")
MODEL_ARGUMENT = typer.Argument(..., help="Model identifier, e.g. anthropic/claude-opus-4-5.")
VARIANT_OPTION = typer.Option(
    None,
    "--variant",
    help="Model variant. Pass an empty string to clear an existing variant.",
)


class EntryKind(str, Enum):
    agent = "agent"
    category = "category"

    @property
    def section(self) -> str:
        return "agents" if self is EntryKind.agent else "categories"


def register(app: typer.Typer) -> None:
    """Register the `config` command group."""

    config_app = typer.Typer(help="Inspect and edit the configuration file.")
    app.add_typer(config_app, name="config")

    @config_app.command("path")
    def path(  # type: ignore[func-returns-value]
        ctx: typer.Context,
        config: Path | None = CONFIG_OPTION,
        verbose: bool = VERBOSE_OPTION,
    ) -> None:
        """Print the configuration path commands operate on."""
        options = global_options(ctx, config=config, verbose=verbose)
        bootstrap_runtime(verbose=options.verbose)
        typer.echo(str(resolve_config_path(options.config)))

    @config_app.command("show")
    def show(  # type: ignore[func-returns-value]
        ctx: typer.Context,
        config: Path | None = CONFIG_OPTION,
        verbose: bool = VERBOSE_OPTION,
    ) -> None:
        """Print the current configuration as JSON."""
        options = global_options(ctx, config=config, verbose=verbose)
        context = bootstrap_runtime(verbose=options.verbose)

        try:
            document = load_config(resolve_config_path(options.config))
        except (OmoConfigError, OSError) as error:
            handle_error(error, context.console, verbose=options.verbose)

        typer.echo(serialize_config(document))

    @config_app.command("set")
    def set_model(  # type: ignore[func-returns-value]
        ctx: typer.Context,
        kind: EntryKind = KIND_ARGUMENT,
        name: str = ENTRY_NAME_ARGUMENT,
        model: str = MODEL_ARGUMENT,
        variant: str | None = VARIANT_OPTION,
        config: Path | None = CONFIG_OPTION,
        verbose: bool = VERBOSE_OPTION,
    ) -> None:
        """Assign a model to an agent or category, backing up the previous file."""
        options = global_options(ctx, config=config, verbose=verbose)
        context = bootstrap_runtime(verbose=options.verbose)
        console = context.console

        try:
            config_path = resolve_config_path(options.config)
            loaded_mtime = get_file_mtime(config_path)
            document = load_config(config_path)

            section = dict(document.get(kind.section) or {})
            entry = dict(section.get(name) or {})
            entry["model"] = model
            if variant is not None:
                if variant:
                    entry["variant"] = variant
                else:
                    entry.pop("variant", None)
            section[name] = entry

            updated = validate_config({**document, kind.section: section})
            backed_up = file_exists(config_path)
            if backed_up:
                create_backup(config_path)
            save_config(config_path, updated, expected_mtime=loaded_mtime)
            if backed_up:
                cleanup_old_backups(config_path)
        except (OmoConfigError, OSError) as error:
            handle_error(error, console, verbose=options.verbose)

        console.print(f"[green]{kind.value.title()} {escape(name)} now uses {escape(model)}.[/]")
        if backed_up:
            console.print("[dim]Backup created. Run 'omo-config undo' to revert.[/]")
