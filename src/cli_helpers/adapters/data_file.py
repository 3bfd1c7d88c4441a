"""Data file adapter receiving raw ``data=True`` output.

Purpose
-------
Give scripts a clean machine-readable channel: headers, progress and context
go to the console, while lines flagged as data are written verbatim (without
colour or indentation) to the file named by ``--data-file``.

Contents
--------
* :class:`DataFileAdapter` - concrete :class:`DataSinkPort` implementation.

System Role
-----------
Opened by the composition root at initialisation. The handle stays open for
the life of the process; each write is flushed so piping consumers see data
immediately.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from cli_helpers.application.ports.data import DataSinkPort
from cli_helpers.domain.errors import SinkUnavailableError
from cli_helpers.domain.levels import SinkState


class DataFileAdapter(DataSinkPort):
    """Write raw lines to a file or an already-open text stream.

    Examples
    --------
    >>> from io import StringIO
    >>> stream = StringIO()
    >>> sink = DataFileAdapter(stream=stream)
    >>> sink.write_lines(["a,b,c", "1,2,3"])
    >>> stream.getvalue()
    'a,b,c\\n1,2,3\\n'
    """

    def __init__(self, *, path: Path | None = None, stream: TextIO | None = None) -> None:
        if (path is None) == (stream is None):
            raise ValueError("Provide exactly one of path or stream")
        self._path = path
        self._stream = stream
        self._state = SinkState.ENABLED if stream is not None else SinkState.DISABLED

    @property
    def state(self) -> SinkState:
        return self._state

    @property
    def path(self) -> Path | None:
        return self._path

    def open(self) -> None:
        """Truncate and open the configured path for writing."""
        if self._stream is not None:
            return
        if self._path is None:
            raise SinkUnavailableError("No data file path configured")
        try:
            self._stream = self._path.open("w", encoding="utf-8")
        except OSError as exc:
            raise SinkUnavailableError(f"Attempted to write to {self._path} failed: {exc.strerror or exc}") from exc
        self._state = SinkState.ENABLED

    def write_lines(self, lines: Sequence[str]) -> None:
        if self._state is not SinkState.ENABLED or self._stream is None:
            return
        for line in lines:
            self._stream.write(f"{line}\n")
        self._stream.flush()

    def disable(self) -> None:
        self._state = SinkState.DISABLED


__all__ = ["DataFileAdapter"]
