"""References from one Taskfile to the Taskfiles it includes."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from .vars import (
    TaskfileError,
    Vars,
    _bool_field,
    _scalar_text,
    _str_field,
    _str_list_field,
    _vars_field,
)


def _expand(path: str) -> str:
    """Expand environment variables and a leading home directory marker."""
    return os.path.expanduser(os.path.expandvars(path))


def _smart_join(base: str, path: str) -> str:
    if os.path.isabs(path):
        return path
    return os.path.normpath(os.path.join(base, path))


@dataclass
class IncludedTaskfile:
    """An included Taskfile and the options it was included with."""

    taskfile: str = ""
    dir: str = ""
    optional: bool = False
    internal: bool = False
    aliases: list[str] = field(default_factory=list)
    advanced_import: bool = False
    vars: Vars | None = None
    base_dir: str = ""

    @classmethod
    def from_yaml(cls, node: Any) -> IncludedTaskfile:
        text = _scalar_text(node)
        if text is not None:
            return cls(taskfile=text)
        if not isinstance(node, Mapping):
            raise TaskfileError("task: include must be a string or a mapping")
        return cls(
            taskfile=_str_field(node, "taskfile"),
            dir=_str_field(node, "dir"),
            optional=_bool_field(node, "optional"),
            internal=_bool_field(node, "internal"),
            aliases=_str_list_field(node, "aliases"),
            advanced_import=True,
            vars=_vars_field(node, "vars"),
        )

    def deep_copy(self) -> IncludedTaskfile:
        """Return a copy that shares no mutable containers with this one."""
        return IncludedTaskfile(
            taskfile=self.taskfile,
            dir=self.dir,
            optional=self.optional,
            internal=self.internal,
            aliases=list(self.aliases),
            advanced_import=self.advanced_import,
            vars=None if self.vars is None else self.vars.deep_copy(),
            base_dir=self.base_dir,
        )

    def full_taskfile_path(self) -> str:
        """The absolute path of the included Taskfile."""
        return self._resolve_path(self.taskfile)

    def full_dir_path(self) -> str:
        """The absolute path of the included Taskfile's working directory."""
        return self._resolve_path(self.dir)

    def _resolve_path(self, path: str) -> str:
        path = _expand(path)
        if os.path.isabs(path):
            return path
        try:
            return os.path.abspath(_smart_join(self.base_dir, path))
        except OSError as exc:
            raise TaskfileError(
                f"task: error resolving path {path} relative to {self.base_dir}: {exc}"
            ) from exc


class IncludedTaskfiles(Mapping):
    """An ordered mapping of namespaces to included Taskfiles."""

    def __init__(
        self,
        items: Mapping[str, IncludedTaskfile]
        | Iterable[tuple[str, IncludedTaskfile]]
        | None = None,
    ):
        self._mapping: dict[str, IncludedTaskfile] = {}
        if items is not None:
            pairs = items.items() if isinstance(items, Mapping) else items
            for key, value in pairs:
                self.set(key, value)

    @classmethod
    def from_yaml(cls, node: Any) -> IncludedTaskfiles:
        if not isinstance(node, Mapping):
            raise TaskfileError("task: includes is not a map")
        result = cls()
        for key, value in node.items():
            name = _scalar_text(key)
            result.set(str(key) if name is None else name, IncludedTaskfile.from_yaml(value))
        return result

    def set(self, key: str, included: IncludedTaskfile) -> None:
        """Set an include, keeping the position of an existing namespace."""
        self._mapping[key] = included

    def merge(self, other: IncludedTaskfiles | None) -> None:
        """Copy every include of other into this one, in order."""
        if other is None:
            return
        for key, value in other.items():
            self.set(key, value)

    def items(self) -> list[tuple[str, IncludedTaskfile]]:
        return list(self._mapping.items())

    def __len__(self) -> int:
        return len(self._mapping)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._mapping))

    def __contains__(self, key: object) -> bool:
        return key in self._mapping

    def __getitem__(self, key: str) -> IncludedTaskfile:
        return self._mapping[key]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IncludedTaskfiles):
            return NotImplemented
        return self.items() == other.items()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"IncludedTaskfiles({self._mapping!r})"