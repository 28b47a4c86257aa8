"""The task definition."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .commands import Cmd, Dep
from .precondition import Precondition
from .vars import (
    TaskfileError,
    Vars,
    _bool_field,
    _str_field,
    _str_list_field,
    _vars_field,
)

if TYPE_CHECKING:
    from .included import IncludedTaskfile


def _object_list(node: Mapping, key: str, kind: Any) -> list:
    value = node.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise TaskfileError(f'task: field "{key}" must be a list')
    return [None if item is None else kind.from_yaml(item) for item in value]


def _copy_items(items: list) -> list:
    return [None if item is None else dataclasses.replace(item) for item in items]


def _copy_vars(value: Vars | None) -> Vars | None:
    return None if value is None else value.deep_copy()


@dataclass
class Task:
    """A task of a Taskfile."""

    task: str = ""
    cmds: list[Cmd | None] = field(default_factory=list)
    deps: list[Dep | None] = field(default_factory=list)
    label: str = ""
    desc: str = ""
    summary: str = ""
    aliases: list[str] = field(default_factory=list)
    sources: list[str] = field(default_factory=list)
    generates: list[str] = field(default_factory=list)
    status: list[str] = field(default_factory=list)
    preconditions: list[Precondition | None] = field(default_factory=list)
    dir: str = ""
    vars: Vars | None = None
    env: Vars | None = None
    silent: bool = False
    interactive: bool = False
    internal: bool = False
    method: str = ""
    prefix: str = ""
    ignore_error: bool = False
    run: str = ""
    include_vars: Vars | None = None
    included_taskfile_vars: Vars | None = None
    included_taskfile: IncludedTaskfile | None = None
    taskfile: str = ""

    def name(self) -> str:
        """The label if there is one, otherwise the task name."""
        return self.label or self.task

    @classmethod
    def from_yaml(cls, node: Any) -> Task:
        """Build a task from a command, a list of commands or a full mapping."""
        if node is None:
            return cls()

        try:
            single = Cmd.from_yaml(node)
        except TaskfileError:
            single = None
        if single is not None and single.cmd:
            return cls(cmds=[single])

        if isinstance(node, list):
            try:
                cmds = [None if item is None else Cmd.from_yaml(item) for item in node]
            except TaskfileError:
                cmds = []
            if cmds:
                return cls(cmds=cmds)

        if not isinstance(node, Mapping):
            raise TaskfileError("task: task must be a command, a list of commands or a mapping")

        return cls(
            cmds=_object_list(node, "cmds", Cmd),
            deps=_object_list(node, "deps", Dep),
            label=_str_field(node, "label"),
            desc=_str_field(node, "desc"),
            summary=_str_field(node, "summary"),
            aliases=_str_list_field(node, "aliases"),
            sources=_str_list_field(node, "sources"),
            generates=_str_list_field(node, "generates"),
            status=_str_list_field(node, "status"),
            preconditions=_object_list(node, "preconditions", Precondition),
            dir=_str_field(node, "dir"),
            vars=_vars_field(node, "vars"),
            env=_vars_field(node, "env"),
            silent=_bool_field(node, "silent"),
            interactive=_bool_field(node, "interactive"),
            internal=_bool_field(node, "internal"),
            method=_str_field(node, "method"),
            prefix=_str_field(node, "prefix"),
            ignore_error=_bool_field(node, "ignore_error"),
            run=_str_field(node, "run"),
        )

    def deep_copy(self) -> Task:
        """Return a copy that shares no mutable containers with this task."""
        return dataclasses.replace(
            self,
            cmds=_copy_items(self.cmds),
            deps=_copy_items(self.deps),
            aliases=list(self.aliases),
            sources=list(self.sources),
            generates=list(self.generates),
            status=list(self.status),
            preconditions=_copy_items(self.preconditions),
            vars=_copy_vars(self.vars),
            env=_copy_vars(self.env),
            include_vars=_copy_vars(self.include_vars),
            included_taskfile_vars=_copy_vars(self.included_taskfile_vars),
            included_taskfile=(
                None if self.included_taskfile is None else self.included_taskfile.deep_copy()
            ),
        )