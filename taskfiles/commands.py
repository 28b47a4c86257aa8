"""Task calls, commands and dependencies."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .vars import (
    TaskfileError,
    Vars,
    _bool_field,
    _scalar_text,
    _str_field,
    _vars_field,
)


@dataclass
class Call:
    """The parameters of a call to a task."""

    task: str
    vars: Vars | None = None


@dataclass
class Cmd:
    """A task command: a shell command or a call to another task."""

    cmd: str = ""
    silent: bool = False
    task: str = ""
    vars: Vars | None = None
    ignore_error: bool = False
    defer: bool = False

    @classmethod
    def from_yaml(cls, node: Any) -> Cmd:
        text = _scalar_text(node)
        if text is not None:
            return cls(cmd=text)
        if not isinstance(node, Mapping):
            raise TaskfileError("task: command must be a string or a mapping")

        try:
            cmd = _str_field(node, "cmd")
            silent = _bool_field(node, "silent")
            ignore_error = _bool_field(node, "ignore_error")
        except TaskfileError:
            pass
        else:
            if cmd:
                return cls(cmd=cmd, silent=silent, ignore_error=ignore_error)

        deferred = node.get("defer")
        deferred_text = _scalar_text(deferred)
        if deferred_text:
            return cls(cmd=deferred_text, defer=True)
        if isinstance(deferred, Mapping):
            try:
                call_task = _str_field(deferred, "task")
                call_vars = _vars_field(deferred, "vars")
            except TaskfileError:
                pass
            else:
                if call_task:
                    return cls(task=call_task, vars=call_vars, defer=True)

        return cls(task=_str_field(node, "task"), vars=_vars_field(node, "vars"))


@dataclass
class Dep:
    """A task dependency."""

    task: str = ""
    vars: Vars | None = None

    @classmethod
    def from_yaml(cls, node: Any) -> Dep:
        text = _scalar_text(node)
        if text is not None:
            return cls(task=text)
        if not isinstance(node, Mapping):
            raise TaskfileError("task: dependency must be a string or a mapping")
        return cls(task=_str_field(node, "task"), vars=_vars_field(node, "vars"))