"""Message formatter turning raw call arguments into display lines.

Purpose
-------
Normalise the fragments handed to ``output``/``verbose``/``debug`` and lay
them out either one per line or as ``key: value`` pairs, applying colour and
indentation on the way.

Contents
--------
* :func:`normalise_fragments` - serialise structured values and chomp line endings.
* :func:`format_lines` - produce the final display lines.
* :data:`KV_PLACEHOLDER` - rendered for empty values in key/value mode.

System Role
-----------
Pure transformation between the level filters and the router; the router
receives both the display lines and the normalised raw fragments.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from .colors import colorize
from .options import CallOptions
from .settings import DEFAULT_KV_FORMAT

KV_PLACEHOLDER = "~"
INDENT_UNIT = "  "

Encoder = Callable[[Any], str]


def chomp(text: str) -> str:
    """Strip one trailing line terminator.

    >>> chomp("line\\r\\n"), chomp("line\\n\\n"), chomp("line")
    ('line', 'line\\n', 'line')
    """

    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith(("\n", "\r")):
        return text[:-1]
    return text


def normalise_fragments(messages: Sequence[Any], encode: Encoder) -> list[str | None]:
    """Serialise non-string messages and chomp every fragment.

    ``None`` survives as ``None`` so key/value mode can tell an undefined value
    apart from the literal text ``"null"``.
    """

    fragments: list[str | None] = []
    for message in messages:
        if message is None:
            fragments.append(None)
            continue
        text = message if isinstance(message, str) else encode(message)
        fragments.append(chomp(text))
    return fragments


def format_lines(
    fragments: Sequence[str | None],
    options: CallOptions,
    *,
    color_enabled: bool,
    kv_format: str = DEFAULT_KV_FORMAT,
) -> list[str]:
    """Return the display lines for ``fragments``.

    Key/value mode applies only when ``options.kv`` is set and the fragment
    count is even; otherwise every fragment becomes its own line. Only values
    are coloured in key/value mode. Indentation is applied last.

    Examples
    --------
    >>> format_lines(["a", "1", "b", None], CallOptions(kv=True), color_enabled=False)
    ['a: 1', 'b: ~']
    >>> format_lines(["a", "1", "b"], CallOptions(kv=True, indent=1), color_enabled=False)
    ['  a', '  1', '  b']
    """

    color = options.color
    if options.kv and len(fragments) % 2 == 0:
        placeholder = KV_PLACEHOLDER if kv_format == DEFAULT_KV_FORMAT else ""
        lines = []
        for index in range(0, len(fragments), 2):
            key = fragments[index] or ""
            value = fragments[index + 1]
            if not value:
                value = placeholder
            lines.append(f"{key}{kv_format}{colorize(color, value, enabled=color_enabled)}")
    else:
        lines = [colorize(color, fragment or "", enabled=color_enabled) for fragment in fragments]

    prefix = INDENT_UNIT * options.indent
    return [f"{prefix}{line}" for line in lines]


__all__ = ["INDENT_UNIT", "KV_PLACEHOLDER", "chomp", "format_lines", "normalise_fragments"]
