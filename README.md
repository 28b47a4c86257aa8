# taskfiles

Read, merge and query `Taskfile.yml` task definitions from Python.

The package understands the Taskfile format: tasks, commands, dependencies,
variables, preconditions, output styles and included Taskfiles. It finds the
Taskfile for a directory, merges includes in under their namespaces, detects
include cycles and looks tasks up by name or by alias.

## Installation

```
pip install taskfiles
```

## Reading a Taskfile

```python
from taskfiles.reader import ReaderNode, read_taskfile

taskfile, directory = read_taskfile(ReaderNode(dir="path/to/project"))
print(taskfile.version)
for name, task in taskfile.tasks.items():
    print(name, task.desc)
```

`read_taskfile` returns the merged `Taskfile` and the directory it was read
from. When the `ReaderNode` has no `entrypoint`, the reader checks the given
directory and each of its parents for `Taskfile.yml` and uses the topmost one
it finds. With an explicit entry point ending in `package.json`, each script
becomes a task that runs `npm` (or `yarn` when a `yarn.lock` sits next to it).

Included Taskfiles are merged in under their namespace, so a task `build` in an
include named `docs` becomes `docs:build`; a task name starting with `:` refers
to the root. An include may point to a file or to a directory, in which case
`Taskfile.yml`, `Taskfile.yaml`, `Taskfile.dist.yml`, `Taskfile.dist.yaml` or
`package.json` is used. Optional includes that are missing are skipped. For
version 3 Taskfiles, included Taskfiles may not declare `dotenv` files. Errors
are raised as `taskfiles.vars.TaskfileError`.

Variables from `Taskvars.yml` (and an OS-specific `Taskvars_<os>.yml`) can be
read with:

```python
from taskfiles.reader import read_taskvars

variables = read_taskvars("path/to/project")
```

## Looking up tasks

```python
from taskfiles.lookup import (
    get_task,
    get_task_list,
    filter_out_internal,
    filter_out_no_desc,
)

task = get_task(taskfile, "build")          # by name or by alias
listed = get_task_list(
    taskfile, "path/to/project", filter_out_internal(), filter_out_no_desc()
)
```

`get_task` raises `TaskNotFoundError` (with a close-match suggestion in
`did_you_mean` when there is one) when no task matches, and
`MultipleTasksWithAliasError` when an alias is shared by several tasks.
`get_task_list` applies the filters in order, then puts tasks whose Taskfile is
`<root_dir>/Taskfile.yml` first and sorts each group by name. `filter_tasks`
builds a filter from any predicate; tasks for which it is true are removed.

## Parsing single elements

Each part of the format can be built from YAML data that is already loaded:

```python
import yaml
from taskfiles.commands import Cmd
from taskfiles.precondition import Precondition

cmd = Cmd.from_yaml(yaml.safe_load("defer: echo 'test'"))
assert cmd.defer and cmd.cmd == "echo 'test'"

pre = Precondition.from_yaml("test -f foo.txt")
assert pre.msg == "`test -f foo.txt` failed"
```

`Vars` is an ordered, read-only mapping of names to `Var` values with `set`,
`merge`, `deep_copy` and `to_cache_map`. `taskfiles.merge.merge` merges one
`Taskfile` into another under given namespaces.

## Watch helpers

`taskfiles.watch.parse_watch_interval("500ms")` turns a duration string such as
`1h2m3.5s` into a `datetime.timedelta`. `should_ignore_file` reports paths
under `/.git`, `/.task` or `/node_modules`.

## What this package does not do

It reads and queries task definitions only. It does not run tasks or their
commands, evaluate templates or shell-based (`sh`) variables, load `dotenv`
files, check `status` or `sources` to decide whether a task is up to date, or
watch files for changes. There is no command-line program.

## Running the tests

```
pip install taskfiles[test]
pytest
```