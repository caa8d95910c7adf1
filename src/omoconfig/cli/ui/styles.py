"""Shared styling helpers for Questionary prompts."""

from __future__ import annotations

from typing import Any

import questionary
from questionary import Style

# Central style for all CLI Questionary prompts. Active profiles are flagged
# with an accent badge; the pointer and answers share the same accent.
CLI_STYLE = Style(
    [
        ("qmark", "fg:#00d1b2 bold"),
        ("question", "bold"),
        ("answer", "fg:#00d1b2 bold"),
        ("pointer", "fg:#00d1b2 bold"),
        ("highlighted", "fg:#00d1b2 bold"),
        ("selected", "fg:#00d1b2"),
        ("instruction", ""),
        ("text", ""),
        ("status.separator", "fg:#444444"),
        ("status.bracket", "fg:#666666"),
        ("status.active", "fg:#00d1b2 bold"),
    ]
)


def profile_choice(name: str, is_active: bool, *, value: Any) -> questionary.Choice:
    """Return a profile row, tagged with an ``active`` badge when it is in use."""

    tokens: list[tuple[str, str]] = [("class:text", name)]
    if is_active:
        tokens.extend(
            [
                ("class:status.separator", "  "),
                ("class:status.bracket", "["),
                ("class:status.active", "active"),
                ("class:status.bracket", "]"),
            ]
        )
    return questionary.Choice(tokens, value=value)
