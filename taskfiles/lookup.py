"""Finding tasks by name or alias, and listing them."""

from __future__ import annotations

import difflib
import os
from collections.abc import Callable, Iterable

from .task import Task
from .taskfile import Taskfile
from .vars import TaskfileError

FilterFunc = Callable[[list[Task]], list[Task]]

ROOT_TASKFILE_NAME = "Taskfile.yml"


class TaskNotFoundError(TaskfileError):
    """Raised when no task has the requested name or alias."""

    def __init__(self, task_name: str, did_you_mean: str = ""):
        self.task_name = task_name
        self.did_you_mean = did_you_mean
        message = f'task: Task "{task_name}" does not exist'
        if did_you_mean:
            message += f'. Did you mean "{did_you_mean}"?'
        super().__init__(message)


class MultipleTasksWithAliasError(TaskfileError):
    """Raised when an alias belongs to more than one task."""

    def __init__(self, alias_name: str, task_names: Iterable[str]):
        self.alias_name = alias_name
        self.task_names = list(task_names)
        super().__init__(
            f'task: Multiple tasks ({", ".join(self.task_names)}) '
            f'with alias "{alias_name}" found'
        )


def _suggestion(taskfile: Taskfile, name: str) -> str:
    candidates = list(taskfile.tasks)
    for task in taskfile.tasks.values():
        if task is not None:
            candidates.extend(task.aliases)
    matches = difflib.get_close_matches(name, candidates, n=1)
    return matches[0] if matches else ""


def get_task(taskfile: Taskfile, name: str) -> Task:
    """Return the task called name, or the single task that has it as an alias."""
    task = taskfile.tasks.get(name)
    if task is not None:
        return task

    aliased = [
        candidate
        for candidate in taskfile.tasks.values()
        if candidate is not None and name in candidate.aliases
    ]
    if len(aliased) > 1:
        raise MultipleTasksWithAliasError(name, [candidate.task for candidate in aliased])
    if not aliased:
        raise TaskNotFoundError(name, _suggestion(taskfile, name))
    return aliased[0]


def get_task_list(taskfile: Taskfile, root_dir: str, *filters: FilterFunc) -> list[Task]:
    """List the tasks after filtering; tasks of the root Taskfile come first."""
    tasks = [task for task in taskfile.tasks.values() if task is not None]
    for apply_filter in filters:
        tasks = apply_filter(tasks)

    root_taskfile = os.path.normpath(os.path.join(root_dir, ROOT_TASKFILE_NAME))

    def sort_key(task: Task) -> str:
        prefix = "0" if task.taskfile == root_taskfile else "1"
        return f"{prefix}:{task.task}"

    return sorted(tasks, key=sort_key)


def filter_tasks(predicate: Callable[[Task], bool]) -> FilterFunc:
    """Return a filter that removes every task for which predicate is true."""

    def apply(tasks: list[Task]) -> list[Task]:
        return [task for task in tasks if not predicate(task)]

    return apply


def filter_out_no_desc() -> FilterFunc:
    """Return a filter that removes tasks without a description."""
    return filter_tasks(lambda task: task.desc == "")


def filter_out_internal() -> FilterFunc:
    """Return a filter that removes internal tasks."""
    return filter_tasks(lambda task: task.internal)