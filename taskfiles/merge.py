"""Merging an included Taskfile into the one that includes it."""

from __future__ import annotations

from .included import IncludedTaskfile, IncludedTaskfiles
from .task import Task
from .taskfile import Taskfile
from .vars import TaskfileError, Vars

NAMESPACE_SEPARATOR = ":"


def task_name_with_namespace(task_name: str, *namespaces: str) -> str:
    """Prefix a task name with namespaces, unless it starts at the root with ':'."""
    if task_name.startswith(NAMESPACE_SEPARATOR):
        return task_name[len(NAMESPACE_SEPARATOR):]
    return NAMESPACE_SEPARATOR.join([*namespaces, task_name])


def merge(
    t1: Taskfile,
    t2: Taskfile,
    included_taskfile: IncludedTaskfile | None,
    *namespaces: str,
) -> None:
    """Merge t2 into t1, placing its tasks under the given namespaces."""
    if t1.version != t2.version:
        raise TaskfileError(
            f'task: Taskfiles versions should match. First is "{t1.version}" '
            f'but second is "{t2.version}"'
        )

    if t2.expansions not in (0, 2):
        t1.expansions = t2.expansions
    if t2.output.is_set():
        t1.output = t2.output

    if t1.includes is None:
        t1.includes = IncludedTaskfiles()
    t1.includes.merge(t2.includes)

    if t1.vars is None:
        t1.vars = Vars()
    if t1.env is None:
        t1.env = Vars()
    t1.vars.merge(t2.vars)
    t1.env.merge(t2.env)

    for key, original in t2.tasks.items():
        # Copy so that nothing in t1 can be changed through t2 afterwards.
        source = original if original is not None else Task()
        task = source.deep_copy()

        if included_taskfile is not None:
            task.internal = task.internal or included_taskfile.internal

        for dep in task.deps:
            if dep is not None:
                dep.task = task_name_with_namespace(dep.task, *namespaces)
        for cmd in task.cmds:
            if cmd is not None and cmd.task:
                cmd.task = task_name_with_namespace(cmd.task, *namespaces)
        task.aliases = [task_name_with_namespace(alias, *namespaces) for alias in task.aliases]

        if included_taskfile is not None:
            for namespace_alias in included_taskfile.aliases:
                task.aliases.append(task_name_with_namespace(task.task, namespace_alias))
                task.aliases.extend(
                    task_name_with_namespace(alias, namespace_alias) for alias in source.aliases
                )

        t1.tasks[task_name_with_namespace(key, *namespaces)] = task