"""Schema for the oh-my-opencode configuration document.

The document is handled as a plain ``dict`` everywhere else; these models only
exist to validate it. Unknown fields are kept so extensions survive a
load/save cycle untouched.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from ..errors import InvalidConfigError


class ModelAssignment(BaseModel):
    """Model (and optional variant) assigned to one agent or category."""

    model_config = ConfigDict(extra="allow")

    model: str
    variant: str | None = None


class ConfigDocument(BaseModel):
    model_config = ConfigDict(extra="allow")

    agents: dict[str, ModelAssignment] | None = None
    categories: dict[str, ModelAssignment] | None = None


def format_validation_issues(error: ValidationError) -> tuple[str, ...]:
    issues: list[str] = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"]) or "<root>"
        issues.append(f"{location}: {detail['msg']}")
    return tuple(issues)


def validate_config(raw: Any) -> dict[str, Any]:
    """
    Validate ``raw`` and return it as a plain JSON-compatible dict.

    Only fields present in ``raw`` are emitted, so validation never invents
    keys. Raises :class:`InvalidConfigError` carrying one issue per problem.
    """
    try:
        document = ConfigDocument.model_validate(raw)
    except ValidationError as error:
        issues = format_validation_issues(error)
        raise InvalidConfigError(", ".join(issues), issues) from error
    return document.model_dump(mode="json", exclude_unset=True)
