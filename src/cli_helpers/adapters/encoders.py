"""Encoders serialising structured values for display.

Purpose
-------
Render dictionaries, lists and other non-string messages as readable text:
indented JSON by default, or a YAML document when requested.

Contents
--------
* :class:`JsonEncoder` - :mod:`json` with sorted keys and ``str`` fallback.
* :class:`YamlEncoder` - PyYAML ``safe_dump`` with an explicit ``---`` start.
"""

from __future__ import annotations

import json
from typing import Any

import yaml

from cli_helpers.application.ports.encoder import EncoderPort


class JsonEncoder(EncoderPort):
    """Encode values as pretty-printed JSON.

    >>> print(JsonEncoder().encode({"b": 1, "a": [1, 2]}))
    {
      "a": [
        1,
        2
      ],
      "b": 1
    }
    """

    def __init__(self, *, indent: int | None = 2) -> None:
        self._indent = indent

    def encode(self, value: Any) -> str:
        return json.dumps(value, indent=self._indent, sort_keys=True, default=str)


class YamlEncoder(EncoderPort):
    """Encode values as a YAML document.

    Values PyYAML cannot represent safely are first reduced to JSON-compatible
    data (unknown objects become their ``str``).

    >>> print(YamlEncoder().encode({"d": 4, "c": 3}), end="")
    ---
    c: 3
    d: 4
    """

    def encode(self, value: Any) -> str:
        try:
            return yaml.safe_dump(value, explicit_start=True, default_flow_style=False, sort_keys=True)
        except yaml.YAMLError:
            reduced = json.loads(json.dumps(value, default=str))
            return yaml.safe_dump(reduced, explicit_start=True, default_flow_style=False, sort_keys=True)


__all__ = ["JsonEncoder", "YamlEncoder"]
