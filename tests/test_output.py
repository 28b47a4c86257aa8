import pytest
import yaml

from taskfiles.output import Output, OutputGroup
from taskfiles.vars import TaskfileError


def test_output_from_name():
    out = Output.from_yaml("prefixed")
    assert out.name == "prefixed"
    assert out.is_set()


def test_output_group_mapping():
    node = yaml.safe_load("group:\n  begin: '::group::{{.TASK}}'\n  end: '::endgroup::'\n")
    out = Output.from_yaml(node)
    assert out == Output(
        name="group", group=OutputGroup(begin="::group::{{.TASK}}", end="::endgroup::")
    )
    assert out.group.is_set()


def test_output_group_empty_mapping():
    out = Output.from_yaml({"group": {}})
    assert out.name == "group"
    assert not out.group.is_set()


def test_output_mapping_without_group_fails():
    with pytest.raises(TaskfileError, match='must have the "group" key'):
        Output.from_yaml({"other": 1})


def test_output_sequence_fails():
    with pytest.raises(TaskfileError, match="must be a string or mapping"):
        Output.from_yaml(["group"])


def test_default_output_not_set():
    assert not Output().is_set()
    assert not OutputGroup().is_set()
    assert OutputGroup(end="x").is_set()