"""Task variables: static values and shell-evaluated dynamic values."""

from __future__ import annotations

import datetime
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any


class TaskfileError(Exception):
    """Raised when a Taskfile or one of its parts is invalid."""


def _scalar_text(node: Any) -> str | None:
    """Return the text of a YAML scalar, or None when the node is not a scalar."""
    if node is None:
        return ""
    if isinstance(node, bool):
        return "true" if node else "false"
    if isinstance(node, (str, int, float, datetime.date)):
        return str(node)
    return None


def _str_field(node: Mapping, key: str) -> str:
    text = _scalar_text(node.get(key))
    if text is None:
        raise TaskfileError(f'task: field "{key}" must be a string')
    return text


def _bool_field(node: Mapping, key: str) -> bool:
    value = node.get(key)
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    raise TaskfileError(f'task: field "{key}" must be a boolean')


def _str_list_field(node: Mapping, key: str) -> list[str]:
    value = node.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise TaskfileError(f'task: field "{key}" must be a list')
    items = []
    for item in value:
        text = _scalar_text(item)
        if text is None:
            raise TaskfileError(f'task: items of "{key}" must be strings')
        items.append(text)
    return items


def _vars_field(node: Mapping, key: str) -> Vars | None:
    value = node.get(key)
    return None if value is None else Vars.from_yaml(value)


@dataclass(frozen=True)
class Var:
    """A variable that is either static text, a live value or a shell command."""

    static: str = ""
    live: Any = None
    sh: str = ""
    dir: str = ""

    @classmethod
    def from_yaml(cls, node: Any) -> Var:
        text = _scalar_text(node)
        if text is not None:
            return cls(static=text)
        if not isinstance(node, Mapping):
            raise TaskfileError('task: variable must be a string or a mapping with a "sh" key')
        return cls(sh=_str_field(node, "sh"))


class Vars(Mapping):
    """An ordered mapping of variable names to variables."""

    def __init__(self, items: Mapping[str, Var] | Iterable[tuple[str, Var]] | None = None):
        self._mapping: dict[str, Var] = {}
        if items is not None:
            pairs = items.items() if isinstance(items, Mapping) else items
            for key, value in pairs:
                self.set(key, value)

    @classmethod
    def from_yaml(cls, node: Any) -> Vars:
        if not isinstance(node, Mapping):
            raise TaskfileError("task: vars is not a map")
        result = cls()
        for key, value in node.items():
            name = _scalar_text(key)
            result.set(str(key) if name is None else name, Var.from_yaml(value))
        return result

    def set(self, key: str, value: Var) -> None:
        """Set a variable, keeping the position of an existing key."""
        self._mapping[key] = value

    def merge(self, other: Vars | None) -> None:
        """Copy every variable of other into this one, in order."""
        if other is None:
            return
        for key, value in other.items():
            self.set(key, value)

    def items(self) -> list[tuple[str, Var]]:
        return list(self._mapping.items())

    def deep_copy(self) -> Vars:
        return Vars(self.items())

    def to_cache_map(self) -> dict[str, Any]:
        """Return the resolved values, leaving out unresolved shell variables."""
        result: dict[str, Any] = {}
        for key, value in self._mapping.items():
            if value.sh:
                continue
            result[key] = value.live if value.live is not None else value.static
        return result

    def __len__(self) -> int:
        return len(self._mapping)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._mapping))

    def __contains__(self, key: object) -> bool:
        return key in self._mapping

    def __getitem__(self, key: str) -> Var:
        return self._mapping[key]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vars):
            return NotImplemented
        return self.items() == other.items()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Vars({self._mapping!r})"