"""Domain objects for script-callable operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ArgKind = Literal["string", "list"]


@dataclass(frozen=True)
class ArgSpec:
    """One positional argument of a script function."""

    name: str
    kind: ArgKind = "string"
    required: bool = True
