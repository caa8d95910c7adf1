"""Implementation of the `backup` command group and `undo`."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import questionary
import typer
from rich.markup import escape
from rich.table import Table

from omoconfig.core.backup import list_backups, restore_backup
from omoconfig.core.configuration import resolve_config_path
from omoconfig.core.errors import OmoConfigError

from ..bootstrap import bootstrap_runtime
from ..errors import handle_error
from ..options import CONFIG_OPTION, VERBOSE_OPTION, global_options
from ..ui.styles import CLI_STYLE

TIMESTAMP_ARGUMENT = typer.Argument(None, help="Backup timestamp (YYYYMMDD-HHMMSS). Prompted for when omitted.")
JSON_OPTION = typer.Option(False, "--json", help="Emit the backup list as JSON.")
YES_OPTION = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt.")
DRY_RUN_OPTION = typer.Option(False, "--dry-run", help="Report the action without touching any file.")


def _local_time(created: datetime) -> str:
    return created.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def register(app: typer.Typer) -> None:
    """Register the `backup` command group and the top-level `undo` command."""

    backup_app = typer.Typer(help="List and restore configuration backups.")
    app.add_typer(backup_app, name="backup")

    @backup_app.command("list")
    def list_(  # type: ignore[func-returns-value]
        ctx: typer.Context,
        config: Path | None = CONFIG_OPTION,
        as_json: bool = JSON_OPTION,
        verbose: bool = VERBOSE_OPTION,
    ) -> None:
        """List backups of the config file, newest first."""
        options = global_options(ctx, config=config, verbose=verbose)
        context = bootstrap_runtime(verbose=options.verbose)
        console = context.console

        try:
            config_path = resolve_config_path(options.config)
            backups = list_backups(config_path)
        except (OmoConfigError, OSError) as error:
            handle_error(error, console, verbose=options.verbose)

        if as_json:
            typer.echo(json.dumps([backup.to_dict() for backup in backups], indent=2))
            return

        if not backups:
            console.print("[yellow]No backups found.[/]")
            return

        table = Table(title=f"Backups for: {escape(str(config_path))}", title_justify="left")
        table.add_column("Timestamp", style="cyan")
        table.add_column("Created", style="dim")
        for backup in backups:
            table.add_row(backup.timestamp, _local_time(backup.created))
        console.print(table)

    @backup_app.command("restore")
    def restore(  # type: ignore[func-returns-value]
        ctx: typer.Context,
        timestamp: str | None = TIMESTAMP_ARGUMENT,
        config: Path | None = CONFIG_OPTION,
        dry_run: bool = DRY_RUN_OPTION,
        verbose: bool = VERBOSE_OPTION,
    ) -> None:
        """Restore a backup over the config file."""
        options = global_options(ctx, config=config, verbose=verbose)
        context = bootstrap_runtime(verbose=options.verbose)
        console = context.console

        try:
            config_path = resolve_config_path(options.config)

            if not timestamp:
                backups = list_backups(config_path)
                if not backups:
                    console.print("[yellow]No backups found.[/]")
                    raise typer.Exit(0)
                choices = [
                    questionary.Choice(f"{backup.timestamp}  ({_local_time(backup.created)})", value=backup.timestamp)
                    for backup in backups
                ]
                timestamp = questionary.select(
                    "Select a backup to restore", choices=choices, style=CLI_STYLE
                ).ask()
                if timestamp is None:
                    console.print("[yellow]Operation cancelled.[/]")
                    raise typer.Exit(0)

            if dry_run:
                console.print(f"[yellow]Dry run: Would restore backup {escape(timestamp)}.[/]")
                raise typer.Exit(0)

            restore_backup(config_path, timestamp)
        except (OmoConfigError, OSError) as error:
            handle_error(error, console, verbose=options.verbose)

        console.print(f"[green]Restored backup {escape(timestamp)}.[/]")

    @app.command("undo")
    def undo(  # type: ignore[func-returns-value]
        ctx: typer.Context,
        config: Path | None = CONFIG_OPTION,
        yes: bool = YES_OPTION,
        dry_run: bool = DRY_RUN_OPTION,
        verbose: bool = VERBOSE_OPTION,
    ) -> None:
        """Restore the most recent backup."""
        options = global_options(ctx, config=config, verbose=verbose)
        context = bootstrap_runtime(verbose=options.verbose)
        console = context.console

        try:
            config_path = resolve_config_path(options.config)
            backups = list_backups(config_path)
            if not backups:
                console.print("[yellow]No backups found. Cannot undo.[/]")
                raise typer.Exit(0)

            latest = backups[0]
            console.print(f"[dim]Config: {escape(str(config_path))}[/]")
            console.print(f"Most recent backup: [cyan]{latest.timestamp}[/]")

            if dry_run:
                console.print(f"[yellow]Dry run: Would restore backup {latest.timestamp}.[/]")
                raise typer.Exit(0)

            if not yes:
                confirmed = questionary.confirm(
                    f"Restore backup {latest.timestamp}?", default=True, style=CLI_STYLE
                ).ask()
                if not confirmed:
                    console.print("[yellow]Undo cancelled.[/]")
                    raise typer.Exit(0)

            restore_backup(config_path, latest.timestamp)
        except (OmoConfigError, OSError) as error:
            handle_error(error, console, verbose=options.verbose)

        console.print(f"[green]Restored backup {latest.timestamp}.[/]")
