"""Port for reading answers to interactive prompts.

Readers block until a line arrives. A closed input stream yields an empty
string rather than an exception so prompt loops keep their shape.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class LineReaderPort(Protocol):
    """Read one line of user input, with or without terminal echo."""

    def read_line(self, prompt: str) -> str:
        """Show ``prompt`` and return the entered line without its terminator."""

    def read_secret(self, prompt: str) -> str:
        """Like :meth:`read_line` but with echo suppressed."""


__all__ = ["LineReaderPort"]
