"""Variable stores and `$name` substitution"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, MutableMapping

VARIABLE_PATTERN = re.compile(r"\$([a-zA-Z0-9_]+)")
PARAMETER_PATTERN = re.compile(r"\d{4,}")


class VariableStore(MutableMapping[str, str]):
    """Mapping of variable name -> string value."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._values: dict[str, str] = {}
        if initial:
            self.update(initial)

    def __getitem__(self, name: str) -> str:
        return self._values[name]

    def __setitem__(self, name: str, value: str) -> None:
        self._values[str(name)] = str(value)

    def __delitem__(self, name: str) -> None:
        del self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._values!r})"


class ParameterStore(VariableStore):
    """Isolated scope for one import, seeded with positional parameters."""

    @staticmethod
    def parameter_name(position: int) -> str:
        return f"{position:04d}"

    @classmethod
    def from_arguments(cls, arguments: Iterable[str]) -> "ParameterStore":
        store = cls()
        for position, value in enumerate(arguments, start=1):
            store[cls.parameter_name(position)] = value
        return store


def is_parameter_name(name: str) -> bool:
    """Whether `name` is a positional import parameter (`0001`, `0002`, ...)."""
    return PARAMETER_PATTERN.fullmatch(name) is not None


def substitute(content: str, scope: MutableMapping[str, str]) -> tuple[str, list[str]]:
    """Replace `$name` tokens with values from `scope`.

    Unknown tokens are left verbatim. Returns the new text and the names that
    could not be resolved, in order of appearance.
    """
    if "$" not in content:
        return content, []

    missing: list[str] = []

    def _replace(m: re.Match[str]) -> str:
        name = m.group(1)
        if name not in scope:
            missing.append(name)
            return m.group(0)
        return scope[name]

    return VARIABLE_PATTERN.sub(_replace, content), missing
