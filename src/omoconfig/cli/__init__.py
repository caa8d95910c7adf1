"""
Typer-based command-line interface for managing oh-my-opencode configuration profiles.
"""

from .app import app

__all__ = ["app"]
