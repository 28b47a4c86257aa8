import pytest
import yaml

from taskfiles.commands import Cmd, Dep
from taskfiles.precondition import Precondition
from taskfiles.task import Task
from taskfiles.vars import TaskfileError, Var, Vars


def test_task_from_single_string():
    assert Task.from_yaml("echo hi") == Task(cmds=[Cmd(cmd="echo hi")])


def test_task_from_list_of_commands():
    task = Task.from_yaml(["echo a", {"task": "other"}])
    assert task.cmds == [Cmd(cmd="echo a"), Cmd(task="other")]


def test_task_list_keeps_null_entries():
    task = Task.from_yaml(yaml.safe_load("- echo a\n- ~\n"))
    assert task.cmds == [Cmd(cmd="echo a"), None]


def test_task_from_full_mapping():
    content = """
desc: Build it
label: builder
aliases: [b]
deps: [setup, {task: gen, vars: {X: y}}]
cmds:
  - go build
sources: ["*.go"]
generates: [bin/app]
status: [test -f bin/app]
preconditions: [which go]
dir: out
vars: {A: a}
env: {E: e}
silent: true
ignore_error: true
run: once
method: checksum
prefix: pre
"""
    task = Task.from_yaml(yaml.safe_load(content))
    assert task.desc == "Build it"
    assert task.aliases == ["b"]
    assert task.deps == [Dep(task="setup"), Dep(task="gen", vars=Vars({"X": Var(static="y")}))]
    assert task.cmds == [Cmd(cmd="go build")]
    assert task.sources == ["*.go"]
    assert task.generates == ["bin/app"]
    assert task.status == ["test -f bin/app"]
    assert task.preconditions == [Precondition(sh="which go", msg="`which go` failed")]
    assert task.dir == "out"
    assert task.vars == Vars({"A": Var(static="a")})
    assert task.env == Vars({"E": Var(static="e")})
    assert task.silent and task.ignore_error
    assert (task.run, task.method, task.prefix) == ("once", "checksum", "pre")
    assert task.name() == "builder"


def test_mapping_with_cmd_key_is_single_command():
    task = Task.from_yaml({"cmd": "make", "silent": True})
    assert task.cmds == [Cmd(cmd="make", silent=True)]


def test_null_task_is_empty():
    assert Task.from_yaml(None) == Task()


def test_empty_list_fails():
    with pytest.raises(TaskfileError):
        Task.from_yaml([])


def test_bad_field_type_fails():
    with pytest.raises(TaskfileError):
        Task.from_yaml({"aliases": "not-a-list"})


def test_name_falls_back_to_task():
    assert Task(task="build").name() == "build"
    assert Task(task="build", label="lbl").name() == "lbl"


def test_deep_copy_is_independent():
    original = Task(
        task="t",
        cmds=[Cmd(task="dep")],
        deps=[Dep(task="d")],
        aliases=["a"],
        vars=Vars({"A": Var(static="1")}),
    )
    copy = original.deep_copy()
    assert copy == original
    copy.deps[0].task = "ns:d"
    copy.cmds[0].task = "ns:dep"
    copy.aliases.append("ns:a")
    copy.vars.set("B", Var(static="2"))
    assert original.deps[0].task == "d"
    assert original.cmds[0].task == "dep"
    assert original.aliases == ["a"]
    assert list(original.vars) == ["A"]