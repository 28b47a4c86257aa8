"""Helpers for watching the sources of tasks."""

from __future__ import annotations

import datetime
import re
from fractions import Fraction

from .vars import TaskfileError

DEFAULT_WATCH_INTERVAL = datetime.timedelta(seconds=5)

_IGNORED_PARTS = ("/.git", "/.task", "/node_modules")

_UNITS_NS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 60 * 60 * 1_000_000_000,
}

_COMPONENT = re.compile(r"(\d*)(?:\.(\d*))?([^\d.]*)")
_MAX_NS = 2**63 - 1


def _parse_duration_ns(text: str) -> int:
    """Parse a duration such as "1h30m" or "-1.5s" into nanoseconds."""
    invalid = ValueError(f'time: invalid duration "{text}"')
    rest = text
    negative = False
    if rest and rest[0] in "+-":
        negative = rest[0] == "-"
        rest = rest[1:]
    if rest == "0":
        return 0
    if not rest:
        raise invalid

    total = Fraction(0)
    while rest:
        match = _COMPONENT.match(rest)
        whole, fraction, unit = match.group(1), match.group(2), match.group(3)
        if not whole and not fraction:
            raise invalid
        if not unit:
            raise ValueError(f'time: missing unit in duration "{text}"')
        if unit not in _UNITS_NS:
            raise ValueError(f'time: unknown unit "{unit}" in duration "{text}"')
        value = Fraction(int(whole or "0"))
        if fraction:
            value += Fraction(int(fraction), 10 ** len(fraction))
        total += value * _UNITS_NS[unit]
        if total > _MAX_NS:
            raise invalid
        rest = rest[match.end():]

    nanoseconds = int(total)
    return -nanoseconds if negative else nanoseconds


def parse_watch_interval(value: str) -> datetime.timedelta:
    """Parse a watch interval such as "500ms" or "2s"."""
    try:
        nanoseconds = _parse_duration_ns(value)
    except ValueError as exc:
        raise TaskfileError(f'task: Could not parse watch interval "{value}": {exc}') from exc
    return datetime.timedelta(microseconds=nanoseconds / 1000)


def should_ignore_file(path: str) -> bool:
    """Whether a file lies in a directory that is never watched."""
    return any(part in path for part in _IGNORED_PARTS)