"""Conversions between script scalars and API strings."""

from __future__ import annotations

import enum

SCALAR_TYPES = (str, int, float, bool)


def scalar_to_string(value: str | int | float | bool) -> str:
    """Render a script scalar the way the script runtime prints it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def enum_to_string(value: object) -> str:
    """String form of an enum-like response field (state names, statuses)."""
    if isinstance(value, enum.Enum):
        return str(value.value)
    return str(value)
