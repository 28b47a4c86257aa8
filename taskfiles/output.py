"""Output style settings of a Taskfile."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .vars import TaskfileError, _scalar_text, _str_field

_FORM_ERROR = 'task: output style must be a string or mapping with a "group" key'


@dataclass
class OutputGroup:
    """Options specific to the group output style."""

    begin: str = ""
    end: str = ""

    def is_set(self) -> bool:
        return bool(self.begin or self.end)


@dataclass
class Output:
    """The output style and its options."""

    name: str = ""
    group: OutputGroup = field(default_factory=OutputGroup)

    def is_set(self) -> bool:
        """Whether a custom output style is set."""
        return self.name != ""

    @classmethod
    def from_yaml(cls, node: Any) -> Output:
        text = _scalar_text(node)
        if text is not None:
            return cls(name=text)
        if not isinstance(node, Mapping):
            raise TaskfileError(_FORM_ERROR)
        group = node.get("group")
        if group is None:
            raise TaskfileError('task: output style must have the "group" key when in mapping form')
        if not isinstance(group, Mapping):
            raise TaskfileError(f"{_FORM_ERROR}: group is not a mapping")
        try:
            begin = _str_field(group, "begin")
            end = _str_field(group, "end")
        except TaskfileError as exc:
            raise TaskfileError(f"{_FORM_ERROR}: {exc}") from exc
        return cls(name="group", group=OutputGroup(begin=begin, end=end))