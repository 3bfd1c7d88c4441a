"""Port for the raw data sink fed by ``data=True`` output."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from cli_helpers.domain.levels import SinkState


@runtime_checkable
class DataSinkPort(Protocol):
    """Receive un-coloured message fragments, one per line."""

    @property
    def state(self) -> SinkState:
        """Return whether the sink still accepts writes."""

    def write_lines(self, lines: Sequence[str]) -> None:
        """Append ``lines`` to the sink."""

    def disable(self) -> None:
        """Stop accepting writes for the rest of the process."""


__all__ = ["DataSinkPort"]
