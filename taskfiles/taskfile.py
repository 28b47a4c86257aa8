"""The Taskfile document."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .included import IncludedTaskfiles
from .output import Output
from .task import Task
from .vars import (
    TaskfileError,
    Vars,
    _bool_field,
    _scalar_text,
    _str_field,
    _str_list_field,
    _vars_field,
)

_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf|infinity|nan)",
    re.IGNORECASE,
)

DEFAULT_EXPANSIONS = 2


def _int_field(node: Mapping, key: str) -> int:
    value = node.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise TaskfileError(f'task: field "{key}" must be an integer')
    return value


def _tasks_field(node: Mapping) -> dict[str, Task | None]:
    value = node.get("tasks")
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise TaskfileError("task: tasks is not a map")
    tasks: dict[str, Task | None] = {}
    for key, task_node in value.items():
        name = _scalar_text(key)
        tasks[str(key) if name is None else name] = (
            None if task_node is None else Task.from_yaml(task_node)
        )
    return tasks


@dataclass
class Taskfile:
    """A parsed Taskfile."""

    version: str = ""
    expansions: int = 0
    output: Output = field(default_factory=Output)
    method: str = ""
    includes: IncludedTaskfiles | None = None
    vars: Vars | None = None
    env: Vars | None = None
    tasks: dict[str, Task | None] = field(default_factory=dict)
    silent: bool = False
    dotenv: list[str] = field(default_factory=list)
    run: str = ""
    interval: str = ""

    @classmethod
    def from_yaml(cls, node: Any) -> Taskfile:
        if not isinstance(node, Mapping):
            raise TaskfileError("task: Taskfile is not a map")
        output_node = node.get("output")
        includes_node = node.get("includes")
        taskfile = cls(
            version=_str_field(node, "version"),
            expansions=_int_field(node, "expansions"),
            output=Output() if output_node is None else Output.from_yaml(output_node),
            method=_str_field(node, "method"),
            includes=None if includes_node is None else IncludedTaskfiles.from_yaml(includes_node),
            vars=_vars_field(node, "vars"),
            env=_vars_field(node, "env"),
            tasks=_tasks_field(node),
            silent=_bool_field(node, "silent"),
            dotenv=_str_list_field(node, "dotenv"),
            run=_str_field(node, "run"),
            interval=_str_field(node, "interval"),
        )
        if taskfile.expansions <= 0:
            taskfile.expansions = DEFAULT_EXPANSIONS
        if taskfile.vars is None:
            taskfile.vars = Vars()
        if taskfile.env is None:
            taskfile.env = Vars()
        return taskfile

    def parsed_version(self) -> float:
        """The version as a number."""
        if not _FLOAT_PATTERN.fullmatch(self.version):
            raise TaskfileError(
                f'task: Could not parse taskfile version "{self.version}": '
                f'strconv.ParseFloat: parsing "{self.version}": invalid syntax'
            )
        return float(self.version)