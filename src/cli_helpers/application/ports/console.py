"""Console port describing terminal emission contracts.

Purpose
-------
Define the abstraction for adapters that write display lines to the
interactive console, letting the router depend on a narrow protocol.

Contents
--------
* :class:`ConsolePort` - runtime-checkable protocol for stdout/stderr output.

System Role
-----------
The console is the one sink assumed always available; every diagnostic the
library produces about its other sinks is delivered through it.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class ConsolePort(Protocol):
    """Write display lines to standard output or standard error."""

    def emit(self, lines: Sequence[str], *, stderr: bool = False, clear: int = 0) -> None:
        """Write ``clear`` blank lines followed by ``lines``."""

    def erase_previous_line(self) -> None:
        """Remove the line the cursor just left (used after sensitive prompts)."""


__all__ = ["ConsolePort"]
