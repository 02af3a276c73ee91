"""Script-facing runtime types: outcomes, bound functions and the module namespace."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, NamedTuple


class Outcome(NamedTuple):
    """Two-slot result of every script call.

    ``value`` is ``None`` exactly when the call failed, in which case
    ``error`` holds the error text.
    """

    value: Any
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.value is not None


@dataclass
class ScriptFunction:
    name: str
    description: str
    handler: Callable[..., Outcome]

    def __call__(self, *args: object, **kwargs: Any) -> Outcome:
        return self.handler(*args, **kwargs)


class ScriptModule(Mapping[str, ScriptFunction]):
    """Namespace of bound functions, reachable by attribute or by name."""

    def __init__(self, name: str, functions: list[ScriptFunction]) -> None:
        self.name = name
        self._functions = {function.name: function for function in functions}

    def __getitem__(self, key: str) -> ScriptFunction:
        return self._functions[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._functions)

    def __len__(self) -> int:
        return len(self._functions)

    def __getattr__(self, item: str) -> ScriptFunction:
        functions = self.__dict__.get("_functions", {})
        try:
            return functions[item]
        except KeyError:
            name = self.__dict__.get("name", "?")
            raise AttributeError(f"module '{name}' has no function '{item}'") from None

    def names(self) -> list[str]:
        return list(self._functions)
