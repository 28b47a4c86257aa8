"""Reading Taskfiles and Taskvars from disk, following includes."""

from __future__ import annotations

import dataclasses
import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path

import yaml

from .commands import Cmd
from .included import _smart_join
from .merge import merge
from .task import Task
from .taskfile import Taskfile
from .vars import TaskfileError, Vars

DEFAULT_TASKFILES = (
    "Taskfile.yml",
    "Taskfile.yaml",
    "Taskfile.dist.yml",
    "Taskfile.dist.yaml",
    "package.json",
)

INCLUDED_DOTENV_ERROR = (
    "task: Included Taskfiles can't have dotenv declarations. "
    "Please, move the dotenv declaration to the main Taskfile"
)


@dataclass
class ReaderNode:
    """A Taskfile being read, linked to the Taskfile that included it."""

    dir: str = ""
    entrypoint: str = ""
    optional: bool = False
    parent: ReaderNode | None = None

    @property
    def path(self) -> str:
        return _smart_join(self.dir, self.entrypoint)


def _goos() -> str:
    """The operating system name used in OS-specific file names."""
    platform = sys.platform
    if platform.startswith("win"):
        return "windows"
    if platform.startswith("linux"):
        return "linux"
    for name in ("freebsd", "openbsd", "netbsd", "darwin", "aix"):
        if platform.startswith(name):
            return name
    if platform.startswith("sunos"):
        return "solaris"
    return platform


def _no_taskfile_error(directory: str) -> TaskfileError:
    return TaskfileError(
        f'task: No Taskfile found in "{directory}". Use "task --init" to create a new one'
    )


def _try_abs_to_rel(path: str) -> str:
    if not os.path.isabs(path):
        return path
    try:
        return os.path.relpath(path, os.getcwd())
    except ValueError:
        return path


def _stat(path: str) -> os.stat_result:
    try:
        return os.stat(path)
    except FileNotFoundError as exc:
        raise TaskfileError(f"stat {path}: no such file or directory") from exc


def search_for_file(dir_path: str, file_name: str) -> str | None:
    """Look for file_name in dir_path and every parent; return the topmost match."""
    if not dir_path:
        dir_path = os.getcwd()
    last_found: str | None = None
    previous = None
    while dir_path != previous:
        candidate = os.path.join(dir_path, file_name)
        try:
            os.stat(candidate)
        except FileNotFoundError:
            pass
        else:
            last_found = candidate
        previous, dir_path = dir_path, os.path.dirname(dir_path)
    return last_found


def find_line_number(data: bytes | str, script_name: str) -> str:
    """Return ':<line>' for the line declaring the script, or '' when absent."""
    text = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
    needle = f'"{script_name}":'
    for number, line in enumerate(text.splitlines(), start=1):
        if needle in line:
            return f":{number}"
    return ""


def resolve_taskfile_path(path: str) -> str:
    """Return path if it is a file, else the first default Taskfile inside it."""
    info = _stat(path)
    if Path(path).is_file() and not os.path.isdir(path):
        return path
    if not os.path.isdir(path):
        # Not a regular file nor a directory: look for defaults anyway.
        del info
    for name in DEFAULT_TASKFILES:
        candidate = _smart_join(path, name)
        if os.path.exists(candidate):
            return candidate
    raise _no_taskfile_error(path)


def check_circular_includes(node: ReaderNode | None) -> None:
    """Raise when node's Taskfile already appears among its ancestors."""
    if node is None:
        raise TaskfileError("task: failed to check for include cycle: node was nil")
    if node.parent is None:
        raise TaskfileError("task: failed to check for include cycle: node.Parent was nil")
    base_path = node.path
    current = node
    while current.parent is not None:
        current = current.parent
        if current.path == base_path:
            raise TaskfileError(
                f"task: include cycle detected between {current.path} <--> {node.parent.path}"
            )


def _read_yaml_file(file: str):
    with open(file, encoding="utf-8") as handle:
        content = handle.read()
    try:
        document = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise TaskfileError(f"task: Failed to parse {_try_abs_to_rel(file)}:\n{exc}") from exc
    if document is None:
        raise TaskfileError(f"task: Failed to parse {_try_abs_to_rel(file)}:\nEOF")
    return document


def _read_taskfile_file(file: str) -> Taskfile:
    document = _read_yaml_file(file)
    try:
        taskfile = Taskfile.from_yaml(document)
    except TaskfileError as exc:
        raise TaskfileError(f"task: Failed to parse {_try_abs_to_rel(file)}:\n{exc}") from exc
    for task in taskfile.tasks.values():
        if task is not None:
            task.taskfile = file
    return taskfile


def _read_package_json(file: str) -> Taskfile:
    with open(file, "rb") as handle:
        data = handle.read()
    document = json.loads(data)
    scripts = document.get("scripts") or {} if isinstance(document, dict) else {}

    try:
        rel_file = os.path.relpath(file, os.getcwd())
    except ValueError:
        rel_file = file

    tool = "npm"
    if os.path.exists(os.path.join(os.path.dirname(file), "yarn.lock")):
        tool = "yarn"

    taskfile = Taskfile(version="3")
    for name in scripts:
        taskfile.tasks[name] = Task(
            taskfile=file,
            desc=f"→ {rel_file}{find_line_number(data, name)}",
            cmds=[
                Cmd(cmd=f"{tool} install --silent --frozen-lockfile"),
                Cmd(cmd=f"{tool} run {name}"),
            ],
        )
    return taskfile


def _with_dir(vars_: Vars | None, directory: str) -> None:
    if vars_ is None:
        return
    for key, value in vars_.items():
        vars_.set(key, dataclasses.replace(value, dir=directory))


def read_taskfile(node: ReaderNode) -> tuple[Taskfile, str]:
    """Read the Taskfile of node with all its includes merged in.

    Returns the Taskfile and the directory it was read from.
    """
    if not node.dir:
        node.dir = os.getcwd()

    if not node.entrypoint:
        found = search_for_file(_smart_join(node.dir, node.entrypoint), "Taskfile.yml")
        if found is None:
            raise _no_taskfile_error(node.dir)
        node.dir = os.path.dirname(found)
        node.entrypoint = os.path.basename(found)

    path = node.path
    project_root = os.path.abspath(node.dir)

    if path.endswith("package.json"):
        taskfile = _read_package_json(path)
    else:
        taskfile = _read_taskfile_file(path)
    del project_root

    taskfile_dir = os.path.dirname(path)
    for task in taskfile.tasks.values():
        if task is not None and not task.dir:
            task.dir = taskfile_dir

    version = taskfile.parsed_version()

    if taskfile.includes is not None:
        for key, included in taskfile.includes.items():
            if not included.base_dir:
                taskfile.includes.set(key, dataclasses.replace(included, base_dir=node.dir))

        for namespace, original in taskfile.includes.items():
            _include(taskfile, node, namespace, dataclasses.replace(original), version)

    if version < 3.0:
        os_path = _smart_join(node.dir, f"Taskfile_{_goos()}.yml")
        if os.path.exists(os_path):
            merge(taskfile, _read_taskfile_file(os_path), None)

    for name, task in list(taskfile.tasks.items()):
        if task is None:
            task = Task()
            taskfile.tasks[name] = task
        task.task = name

    return taskfile, taskfile_dir


def _include(taskfile: Taskfile, node: ReaderNode, namespace: str, included, version: float) -> None:
    try:
        path = resolve_taskfile_path(included.full_taskfile_path())
    except (TaskfileError, OSError):
        if included.optional:
            return
        raise

    include_node = ReaderNode(
        dir=os.path.dirname(path),
        entrypoint=os.path.basename(path),
        parent=node,
        optional=included.optional,
    )
    check_circular_includes(include_node)

    try:
        included_taskfile, _ = read_taskfile(include_node)
    except (TaskfileError, OSError, ValueError):
        if included.optional:
            return
        raise

    if version >= 3.0 and included_taskfile.dotenv:
        raise TaskfileError(INCLUDED_DOTENV_ERROR)

    if included.advanced_import:
        directory = included.full_dir_path()
        _with_dir(included_taskfile.vars, directory)
        _with_dir(included_taskfile.env, directory)
        for task in included_taskfile.tasks.values():
            if task is None:
                continue
            task.dir = _smart_join(directory, task.dir)
            task.include_vars = included.vars
            task.included_taskfile_vars = included_taskfile.vars
            task.included_taskfile = included

    merge(taskfile, included_taskfile, included, namespace)

    if included_taskfile.tasks.get("default") is not None and taskfile.tasks.get(namespace) is None:
        default_task = taskfile.tasks[f"{namespace}:default"]
        default_task.aliases.append(namespace)
        default_task.aliases.extend(included.aliases)


def _read_taskvars_file(file: str) -> Vars:
    document = _read_yaml_file(file)
    return Vars.from_yaml(document)


def read_taskvars(directory: str) -> Vars:
    """Read Taskvars.yml and its OS-specific companion from directory."""
    result = Vars()
    path = _smart_join(directory, "Taskvars.yml")
    if os.path.exists(path):
        result = _read_taskvars_file(path)

    os_path = _smart_join(directory, f"Taskvars_{_goos()}.yml")
    if os.path.exists(os_path):
        result.merge(_read_taskvars_file(os_path))
    return result