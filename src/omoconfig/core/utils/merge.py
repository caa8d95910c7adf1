"""Structural merge used to layer profile documents over a template."""

from __future__ import annotations

from typing import Any


def _is_plain_mapping(value: Any) -> bool:
    return isinstance(value, dict) and all(isinstance(key, str) for key in value)


def deep_merge(base: Any, override: Any) -> Any:
    """
    Recursively merge ``override`` onto ``base`` and return a new value.

    Only string-keyed dicts are merged key by key. Lists, scalars and type
    mismatches are replaced by the override. Neither input is mutated.
    """
    if _is_plain_mapping(base) and _is_plain_mapping(override):
        result: dict[str, Any] = {}
        for key in (*base.keys(), *(key for key in override if key not in base)):
            if key not in override:
                result[key] = base[key]
                continue
            base_value = base.get(key)
            override_value = override[key]
            if _is_plain_mapping(base_value) and _is_plain_mapping(override_value):
                result[key] = deep_merge(base_value, override_value)
            else:
                result[key] = override_value
        return result

    if override is None:
        return base
    return override
