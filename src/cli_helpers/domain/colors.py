"""Colour helpers wrapping text in terminal escape sequences.

Purpose
-------
Turn a colour name into ANSI escapes using Rich's style grammar and remove
such escapes again before text leaves the terminal (syslog, paste).

Contents
--------
* :func:`colorize` - wrap text when colour output is enabled.
* :func:`strip_color` - idempotent removal of terminal escape sequences.

System Role
-----------
Pure helpers used by the message formatter and the router.
"""

from __future__ import annotations

import re
from functools import lru_cache

from rich.color import ColorSystem
from rich.errors import StyleSyntaxError
from rich.style import Style

_ESCAPE_RE = re.compile(r"\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)|\x1b\[[0-?]*[ -/]*[@-~]|\x1b[@-Z\\-_]")


@lru_cache(maxsize=128)
def _parse_style(name: str) -> Style | None:
    try:
        return Style.parse(name)
    except StyleSyntaxError:
        return None


def colorize(color: str | None, text: str, *, enabled: bool = True) -> str:
    """Return ``text`` wrapped in the escapes for ``color``.

    Colour names follow Rich's style grammar (``"red"``, ``"bold yellow"``,
    ``"#ff8800"``). Unrecognised names render in the default colour instead
    of raising, so a typo never breaks a script.

    Examples
    --------
    >>> colorize("red", "alert")
    '\\x1b[31malert\\x1b[0m'
    >>> colorize("red", "alert", enabled=False)
    'alert'
    >>> colorize("no-such-colour", "alert")
    'alert'
    """

    if not color or not enabled:
        return text
    style = _parse_style(color)
    if style is None:
        return text
    return style.render(text, color_system=ColorSystem.STANDARD)


def strip_color(text: str) -> str:
    """Remove terminal escape sequences from ``text``.

    Removal repeats until nothing changes, so fragments that only become an
    escape sequence after an inner one was removed are stripped as well.

    >>> strip_color(colorize("green", "ok"))
    'ok'
    """

    previous = None
    while previous != text:
        previous = text
        text = _ESCAPE_RE.sub("", text)
    return text


__all__ = ["colorize", "strip_color"]
