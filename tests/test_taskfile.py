import pytest
import yaml

from taskfiles.taskfile import Taskfile
from taskfiles.vars import TaskfileError, Var, Vars


def load(text):
    return Taskfile.from_yaml(yaml.safe_load(text))


def test_minimal_taskfile_defaults():
    tf = load("version: '3'\n")
    assert tf.version == "3"
    assert tf.expansions == 2
    assert tf.vars == Vars()
    assert tf.env == Vars()
    assert tf.tasks == {}
    assert tf.includes is None
    assert tf.output.is_set() is False


def test_unquoted_version_is_text():
    tf = load("version: 3\n")
    assert tf.version == "3"
    assert tf.parsed_version() == 3.0


def test_non_positive_expansions_become_default():
    assert load("version: '3'\nexpansions: -1\n").expansions == 2
    assert load("version: '3'\nexpansions: 5\n").expansions == 5


def test_fields_are_read():
    tf = load(
        """
version: '3'
method: checksum
silent: true
run: once
interval: 500ms
dotenv: ['.env', 'other.env']
vars:
  A: one
env:
  B: two
output: prefixed
"""
    )
    assert tf.method == "checksum"
    assert tf.silent is True
    assert tf.run == "once"
    assert tf.interval == "500ms"
    assert tf.dotenv == [".env", "other.env"]
    assert tf.vars == Vars({"A": Var(static="one")})
    assert tf.env == Vars({"B": Var(static="two")})
    assert tf.output.name == "prefixed"


def test_tasks_are_parsed_in_order():
    tf = load(
        """
version: '3'
tasks:
  build: go build
  test:
    desc: run tests
    cmds: [go test]
  empty:
"""
    )
    assert list(tf.tasks) == ["build", "test", "empty"]
    assert tf.tasks["build"].cmds[0].cmd == "go build"
    assert tf.tasks["test"].desc == "run tests"
    assert tf.tasks["empty"] is None


def test_includes_are_parsed():
    tf = load("version: '3'\nincludes:\n  docs: ./docs\n")
    assert list(tf.includes) == ["docs"]
    assert tf.includes["docs"].taskfile == "./docs"


def test_parsed_version_with_fraction():
    assert load("version: '2.6'\n").parsed_version() == pytest.approx(2.6)


def test_invalid_version_raises():
    tf = Taskfile(version="abc")
    with pytest.raises(TaskfileError, match='Could not parse taskfile version "abc"'):
        tf.parsed_version()


def test_empty_version_raises():
    with pytest.raises(TaskfileError):
        Taskfile().parsed_version()


def test_non_mapping_document_raises():
    with pytest.raises(TaskfileError):
        Taskfile.from_yaml(["version"])


def test_tasks_must_be_a_map():
    with pytest.raises(TaskfileError):
        load("version: '3'\ntasks: [a, b]\n")