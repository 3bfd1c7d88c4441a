"""Port for submitting the captured transcript to a paste service."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class PastePort(Protocol):
    """Publish text and return the resulting URL."""

    def submit(self, text: str, *, summary: str, description: str, public: bool = False) -> str:
        """Send ``text`` and return its URL; raise when every service fails."""


__all__ = ["PastePort"]
