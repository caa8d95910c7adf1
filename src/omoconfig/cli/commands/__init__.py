"""Command groups registered on the root Typer application."""
