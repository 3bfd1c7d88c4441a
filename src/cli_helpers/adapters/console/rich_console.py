"""Rich-powered console adapter implementing :class:`ConsolePort`.

Purpose
-------
Write display lines to stdout or stderr through Rich consoles. Lines are
written byte for byte (tabs, trailing blanks and markup-like brackets
included); colour escapes produced by the formatter pass through when the
console renders colour and are stripped when it does not.

Contents
--------
* :class:`RichConsoleAdapter` - adapter constructed by :func:`cli_helpers.runtime.build_runtime`.

System Role
-----------
Primary human-facing sink and the channel for every diagnostic the library
reports about its other sinks.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.control import Control
from rich.segment import ControlType

from cli_helpers.application.ports.console import ConsolePort
from cli_helpers.domain.colors import strip_color


def _make_console(*, stderr: bool, color: bool) -> Console:
    if color:
        return Console(stderr=stderr, force_terminal=True, color_system="standard", highlight=False, soft_wrap=True)
    return Console(stderr=stderr, no_color=True, highlight=False, soft_wrap=True)


class RichConsoleAdapter(ConsolePort):
    """Render display lines using Rich consoles bound to stdout and stderr.

    Examples
    --------
    >>> from io import StringIO
    >>> out = Console(file=StringIO(), no_color=True, soft_wrap=True)
    >>> adapter = RichConsoleAdapter(stdout=out)
    >>> adapter.emit(["first", "second"], clear=1)
    >>> out.file.getvalue()
    '\\nfirst\\nsecond\\n'
    """

    def __init__(
        self,
        *,
        stdout: Console | None = None,
        stderr: Console | None = None,
        color: bool = False,
    ) -> None:
        """Use the supplied consoles or create ones honouring ``color``."""
        self._stdout = stdout if stdout is not None else _make_console(stderr=False, color=color)
        self._stderr = stderr if stderr is not None else _make_console(stderr=True, color=color)

    @property
    def stdout(self) -> Console:
        return self._stdout

    @property
    def stderr(self) -> Console:
        return self._stderr

    def emit(self, lines: Sequence[str], *, stderr: bool = False, clear: int = 0) -> None:
        """Write ``clear`` blank lines, then each line unchanged on its own row."""
        console = self._stderr if stderr else self._stdout
        keep_color = not console.no_color and console.color_system is not None
        rendered = [line if keep_color else strip_color(line) for line in lines]
        payload = "\n" * clear + "".join(f"{line}\n" for line in rendered)
        if not payload:
            return
        # Written to the file directly; Rich renderables expand tabs.
        with console._lock:
            console.file.write(payload)
            console.file.flush()

    def erase_previous_line(self) -> None:
        """Move the cursor up one row and clear it."""
        if not self._stdout.is_terminal:
            return
        self._stdout.control(Control.move(0, -1), Control((ControlType.ERASE_IN_LINE, 2)))


__all__ = ["RichConsoleAdapter"]
