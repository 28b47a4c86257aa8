"""Preconditions a task needs before it runs."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .vars import TaskfileError, _scalar_text, _str_field


@dataclass
class Precondition:
    """A shell check and the message shown when it fails."""

    sh: str = ""
    msg: str = ""

    @classmethod
    def from_yaml(cls, node: Any) -> Precondition:
        text = _scalar_text(node)
        if text is not None:
            return cls(sh=text, msg=f"`{text}` failed")
        if not isinstance(node, Mapping):
            raise TaskfileError("task: Can't unmarshal precondition value")
        sh = _str_field(node, "sh")
        msg = _str_field(node, "msg") or f"{sh} failed"
        return cls(sh=sh, msg=msg)