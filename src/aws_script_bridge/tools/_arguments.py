"""Positional argument extraction for script functions.

Every script function declares an ordered tuple of ``ArgSpec``. A single
routine checks arity and coarse types up front and returns a frozen
argument model, so handlers never see raw script values.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from aws_script_bridge.domain.operations import ArgSpec
from aws_script_bridge.errors import ArgumentError
from aws_script_bridge.utils.serialization import SCALAR_TYPES, scalar_to_string

ArgsT = TypeVar("ArgsT", bound=BaseModel)

def _describe(value: object) -> str:
    if value is None:
        return "no value"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (list, tuple, dict)):
        return "table"
    return type(value).__name__


def _bad_argument(operation: str, position: int, detail: str) -> ArgumentError:
    return ArgumentError(f"bad argument #{position} to '{operation}' ({detail})")


def _coerce_string(operation: str, position: int, value: object) -> str:
    if isinstance(value, str):
        return value
    # Numbers are string-coercible in the script runtime; booleans are not.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return scalar_to_string(value)
    raise _bad_argument(operation, position, f"string expected, got {_describe(value)}")


def _coerce_list(operation: str, position: int, value: object) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        raise _bad_argument(operation, position, f"list expected, got {_describe(value)}")

    items: list[str] = []
    for index, item in enumerate(value, start=1):
        if not isinstance(item, SCALAR_TYPES):
            raise _bad_argument(
                operation,
                position,
                f"element {index} is a {_describe(item)}, scalar expected",
            )
        items.append(scalar_to_string(item))
    return tuple(items)


def extract_arguments(
    operation: str,
    schema: Sequence[ArgSpec],
    args: Sequence[object],
    model: type[ArgsT],
) -> ArgsT:
    """Validate positional ``args`` against ``schema`` and build ``model``.

    Values past the end of ``schema`` are ignored, as the script runtime
    reads only the arguments a function declares.

    Raises:
        ArgumentError: on missing or mistyped arguments.
    """
    values: dict[str, object] = {}
    for position, spec in enumerate(schema, start=1):
        raw = args[position - 1] if position <= len(args) else None
        if raw is None:
            if spec.required:
                raise _bad_argument(
                    operation,
                    position,
                    f"{spec.kind} expected, got no value",
                )
            values[spec.name] = None
            continue

        if spec.kind == "list":
            values[spec.name] = _coerce_list(operation, position, raw)
        else:
            values[spec.name] = _coerce_string(operation, position, raw)

    try:
        return model(**values)
    except ValidationError as exc:
        raise ArgumentError(f"invalid arguments to '{operation}': {exc}") from exc
