"""Port for serialising structured values into printable text."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class EncoderPort(Protocol):
    """Turn dictionaries, lists and scalars into text."""

    def encode(self, value: Any) -> str: ...


__all__ = ["EncoderPort"]
