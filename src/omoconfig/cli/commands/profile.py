"""Implementation of the `profile` command group."""

from __future__ import annotations

import json
from pathlib import Path

import questionary
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from omoconfig.core.configuration import load_config, resolve_config_path, serialize_config
from omoconfig.core.errors import InvalidConfigError, OmoConfigError
from omoconfig.core.profiles import (
    ProfileInfo,
    delete_profile,
    list_profiles,
    rename_profile,
    save_profile,
    use_profile,
)
from omoconfig.core.profiles.constants import PROFILE_TEMPLATE_FILE_NAME
from omoconfig.core.profiles.names import profile_name_problem
from omoconfig.core.utils.fs import atomic_write, file_exists

from ..bootstrap import bootstrap_runtime
from ..errors import handle_error
from ..options import CONFIG_OPTION, VERBOSE_OPTION, global_options
from ..ui.styles import CLI_STYLE, profile_choice

NAME_ARGUMENT = typer.Argument(None, help="Profile name. Prompted for when omitted.")
OLD_NAME_ARGUMENT = typer.Argument(None, help="Current profile name. Prompted for when omitted.")
NEW_NAME_ARGUMENT = typer.Argument(None, help="New profile name. Prompted for when omitted.")
TEMPLATE_OPTION = typer.Option(
    None,
    "--template",
    help="Override the profile template path.",
)
JSON_OPTION = typer.Option(False, "--json", help="Emit the profile list as JSON.")
YES_OPTION = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt.")
DRY_RUN_OPTION = typer.Option(False, "--dry-run", help="Report the action without touching any file.")


def _validate_name_input(value: str) -> bool | str:
    problem = profile_name_problem(value)
    return True if problem is None else problem


def _prompt_new_name(message: str) -> str | None:
    return questionary.text(message, validate=_validate_name_input, style=CLI_STYLE).ask()


def _select_profile(message: str, profiles: list[ProfileInfo]) -> str | None:
    choices = [profile_choice(profile.name, profile.is_active, value=profile.name) for profile in profiles]
    return questionary.select(message, choices=choices, style=CLI_STYLE).ask()


def _confirm(message: str) -> bool:
    return bool(questionary.confirm(message, default=False, style=CLI_STYLE).ask())


def _cancelled(console: Console) -> typer.Exit:
    console.print("[yellow]Operation cancelled.[/]")
    return typer.Exit(0)


def resolve_template_output_path(config_dir: Path, template_override: str | None = None) -> Path:
    """
    Resolve where `profile template` writes, relative overrides being taken from config_dir.

    Raises InvalidConfigError when the result would land outside config_dir.
    """
    resolved_dir = config_dir.resolve()
    trimmed = (template_override or "").strip()
    if trimmed:
        candidate = Path(trimmed).expanduser()
        candidate = candidate.resolve() if candidate.is_absolute() else (resolved_dir / candidate).resolve()
    else:
        candidate = resolved_dir / PROFILE_TEMPLATE_FILE_NAME

    if candidate != resolved_dir and not candidate.is_relative_to(resolved_dir):
        raise InvalidConfigError(f"Template path must be within {resolved_dir}")
    return candidate


def register(app: typer.Typer) -> None:
    """Register the `profile` command group."""

    profile_app = typer.Typer(help="Save, switch and manage configuration profiles.")
    app.add_typer(profile_app, name="profile")

    @profile_app.command("save")
    def save(  # type: ignore[func-returns-value]
        ctx: typer.Context,
        name: str | None = NAME_ARGUMENT,
        config: Path | None = CONFIG_OPTION,
        template: Path | None = TEMPLATE_OPTION,
        verbose: bool = VERBOSE_OPTION,
    ) -> None:
        """Save the current config as a named profile."""
        options = global_options(ctx, config=config, verbose=verbose)
        context = bootstrap_runtime(verbose=options.verbose)
        console = context.console

        try:
            config_path = resolve_config_path(options.config)
            document = load_config(config_path)

            if not name:
                name = _prompt_new_name("Enter a name for this profile")
                if name is None:
                    raise _cancelled(console)

            save_profile(
                config_path.parent,
                name,
                document,
                config_path=config_path,
                template_path=template,
            )
        except (OmoConfigError, OSError) as error:
            handle_error(error, console, verbose=options.verbose)

        console.print(f'[green]Profile "{escape(name)}" saved successfully.[/]')

    @profile_app.command("use")
    def use(  # type: ignore[func-returns-value]
        ctx: typer.Context,
        name: str | None = NAME_ARGUMENT,
        config: Path | None = CONFIG_OPTION,
        verbose: bool = VERBOSE_OPTION,
    ) -> None:
        """Switch the active profile."""
        options = global_options(ctx, config=config, verbose=verbose)
        context = bootstrap_runtime(verbose=options.verbose)
        console = context.console

        try:
            config_dir = resolve_config_path(options.config).parent

            if not name:
                profiles = list_profiles(config_dir)
                if not profiles:
                    console.print("[yellow]No profiles found. Create one with 'profile save <name>' first.[/]")
                    raise typer.Exit(0)
                name = _select_profile("Select a profile to use", profiles)
                if name is None:
                    raise _cancelled(console)

            use_profile(config_dir, name)
        except (OmoConfigError, OSError) as error:
            handle_error(error, console, verbose=options.verbose)

        console.print(f'[green]Now using profile "{escape(name)}".[/]')

    @profile_app.command("list")
    def list_(  # type: ignore[func-returns-value]
        ctx: typer.Context,
        config: Path | None = CONFIG_OPTION,
        as_json: bool = JSON_OPTION,
        verbose: bool = VERBOSE_OPTION,
    ) -> None:
        """List saved profiles, oldest first."""
        options = global_options(ctx, config=config, verbose=verbose)
        context = bootstrap_runtime(verbose=options.verbose)
        console = context.console

        try:
            config_dir = resolve_config_path(options.config).parent
            profiles = list_profiles(config_dir)
        except (OmoConfigError, OSError) as error:
            handle_error(error, console, verbose=options.verbose)

        if as_json:
            typer.echo(json.dumps([profile.to_dict() for profile in profiles], indent=2))
            return

        if not profiles:
            console.print("[yellow]No profiles found.[/]")
            return

        table = Table(title=f"Profiles for: {escape(str(config_dir))}", title_justify="left")
        table.add_column("", width=1)
        table.add_column("Name", style="cyan")
        table.add_column("Created", style="dim")
        for profile in profiles:
            marker = "[green]*[/]" if profile.is_active else ""
            table.add_row(marker, escape(profile.name), profile.created.astimezone().strftime("%Y-%m-%d %H:%M:%S"))
        console.print(table)
        console.print("[dim]* indicates active profile[/]")

    @profile_app.command("delete")
    def delete(  # type: ignore[func-returns-value]
        ctx: typer.Context,
        name: str | None = NAME_ARGUMENT,
        config: Path | None = CONFIG_OPTION,
        yes: bool = YES_OPTION,
        dry_run: bool = DRY_RUN_OPTION,
        verbose: bool = VERBOSE_OPTION,
    ) -> None:
        """Delete a profile that is not currently active."""
        options = global_options(ctx, config=config, verbose=verbose)
        context = bootstrap_runtime(verbose=options.verbose)
        console = context.console

        try:
            config_dir = resolve_config_path(options.config).parent

            if not name:
                profiles = list_profiles(config_dir)
                if not profiles:
                    console.print("[yellow]No profiles found.[/]")
                    raise typer.Exit(0)
                deletable = [profile for profile in profiles if not profile.is_active]
                if not deletable:
                    console.print(
                        "[yellow]Cannot delete the only profile while it's active. "
                        "Switch to another profile first.[/]"
                    )
                    raise typer.Exit(0)
                name = _select_profile("Select a profile to delete", deletable)
                if name is None:
                    raise _cancelled(console)

            if dry_run:
                console.print(f'[yellow]Dry run: Would delete profile "{escape(name)}".[/]')
                raise typer.Exit(0)

            if not yes and not _confirm(f'Delete profile "{name}"?'):
                raise _cancelled(console)

            delete_profile(config_dir, name)
        except (OmoConfigError, OSError) as error:
            handle_error(error, console, verbose=options.verbose)

        console.print(f'[green]Profile "{escape(name)}" deleted.[/]')

    @profile_app.command("rename")
    def rename(  # type: ignore[func-returns-value]
        ctx: typer.Context,
        old_name: str | None = OLD_NAME_ARGUMENT,
        new_name: str | None = NEW_NAME_ARGUMENT,
        config: Path | None = CONFIG_OPTION,
        verbose: bool = VERBOSE_OPTION,
    ) -> None:
        """Rename a profile, keeping it active if it was."""
        options = global_options(ctx, config=config, verbose=verbose)
        context = bootstrap_runtime(verbose=options.verbose)
        console = context.console

        try:
            config_dir = resolve_config_path(options.config).parent

            if not old_name:
                profiles = list_profiles(config_dir)
                if not profiles:
                    console.print("[yellow]No profiles found.[/]")
                    raise typer.Exit(0)
                old_name = _select_profile("Select a profile to rename", profiles)
                if old_name is None:
                    raise _cancelled(console)

            if not new_name:
                new_name = _prompt_new_name(f'Enter new name for profile "{old_name}"')
                if new_name is None:
                    raise _cancelled(console)

            rename_profile(config_dir, old_name, new_name)
        except (OmoConfigError, OSError) as error:
            handle_error(error, console, verbose=options.verbose)

        console.print(f'[green]Profile "{escape(old_name)}" renamed to "{escape(new_name)}".[/]')

    @profile_app.command("template")
    def template(  # type: ignore[func-returns-value]
        ctx: typer.Context,
        config: Path | None = CONFIG_OPTION,
        template_path: str | None = TEMPLATE_OPTION,
        yes: bool = YES_OPTION,
        dry_run: bool = DRY_RUN_OPTION,
        verbose: bool = VERBOSE_OPTION,
    ) -> None:
        """Write the current config as the template merged under every saved profile."""
        options = global_options(ctx, config=config, verbose=verbose)
        context = bootstrap_runtime(verbose=options.verbose)
        console = context.console

        try:
            config_path = resolve_config_path(options.config)
            output_path = resolve_template_output_path(config_path.parent, template_path)
            document = load_config(config_path)
            exists = file_exists(output_path)

            if dry_run:
                action = "overwrite" if exists else "create"
                console.print(f"[yellow]Dry run: Would {action} template at {escape(str(output_path))}.[/]")
                raise typer.Exit(0)

            if exists and not yes and not _confirm(f"Template already exists at {output_path}. Overwrite?"):
                raise _cancelled(console)

            atomic_write(output_path, serialize_config(document))
        except (OmoConfigError, OSError) as error:
            handle_error(error, console, verbose=options.verbose)

        console.print(f"[green]Template saved to {escape(str(output_path))}.[/]")
