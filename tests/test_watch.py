import datetime

import pytest

from taskfiles.vars import TaskfileError
from taskfiles.watch import DEFAULT_WATCH_INTERVAL, parse_watch_interval, should_ignore_file


@pytest.mark.parametrize(
    "text, expected",
    [
        ("5s", datetime.timedelta(seconds=5)),
        ("500ms", datetime.timedelta(milliseconds=500)),
        ("1h30m", datetime.timedelta(hours=1, minutes=30)),
        ("1.5s", datetime.timedelta(seconds=1.5)),
        ("-2m", datetime.timedelta(minutes=-2)),
        ("+3s", datetime.timedelta(seconds=3)),
        ("0", datetime.timedelta(0)),
        ("100us", datetime.timedelta(microseconds=100)),
    ],
)
def test_parse_watch_interval(text, expected):
    assert parse_watch_interval(text) == expected


def test_default_interval_matches_parsed_value():
    assert parse_watch_interval("5s") == DEFAULT_WATCH_INTERVAL


def test_parts_add_up():
    combined = parse_watch_interval("2m10s")
    assert combined == parse_watch_interval("2m") + parse_watch_interval("10s")


@pytest.mark.parametrize("text", ["", "abc", "5", "1x", ".s", "-"])
def test_invalid_interval(text):
    with pytest.raises(TaskfileError) as info:
        parse_watch_interval(text)
    assert f'task: Could not parse watch interval "{text}"' in str(info.value)


def test_missing_unit_message():
    with pytest.raises(TaskfileError) as info:
        parse_watch_interval("5")
    assert "missing unit" in str(info.value)


@pytest.mark.parametrize(
    "path, ignored",
    [
        ("/project/.git/HEAD", True),
        ("/project/.task/checksum/build", True),
        ("/project/node_modules/pkg/index.js", True),
        ("/project/src/main.go", False),
        ("/project/git/file", False),
    ],
)
def test_should_ignore_file(path, ignored):
    assert should_ignore_file(path) is ignored