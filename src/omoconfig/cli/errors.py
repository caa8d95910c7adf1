"""Render core errors for the terminal and map them to exit codes."""

from __future__ import annotations

import traceback
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from omoconfig.core.errors import (
    BackupError,
    ConcurrentModificationError,
    InvalidConfigError,
    PermissionDeniedError,
    ProfileError,
)


def handle_error(error: Exception, console: Console, *, verbose: bool = False) -> NoReturn:
    message = escape(str(error))

    if isinstance(error, ProfileError):
        console.print(f"[red]{message}[/]")
        raise typer.Exit(1) from error

    if isinstance(error, PermissionDeniedError):
        console.print(f"[red]{message}[/]")
        console.print("Check file permissions or try running with [cyan]sudo[/].")
        raise typer.Exit(1) from error

    if isinstance(error, ConcurrentModificationError):
        console.print(f"[red]{message}[/]")
        console.print("The configuration was modified by another process. Please try again.")
        raise typer.Exit(1) from error

    if isinstance(error, InvalidConfigError):
        console.print(f"[red]{message}[/]")
        console.print("Fix the reported fields in the file, or restore a backup with [cyan]omo-config undo[/].")
        raise typer.Exit(1) from error

    if isinstance(error, BackupError):
        console.print(f"[red]{message}[/]")
        console.print("Run [cyan]omo-config backup list[/] to see the available backups.")
        raise typer.Exit(1) from error

    console.print(f"[red]An unexpected error occurred: {message}[/]")
    if verbose:
        console.print(escape("".join(traceback.format_exception(error))), style="dim")
    else:
        console.print("Run with [cyan]--verbose[/] for more details.")
    raise typer.Exit(1) from error
