"""Process-wide accumulation structures drained at shutdown.

Purpose
-------
Remember what must be replayed or reported when the host script finishes:
sticky messages, the paste transcript, and how often each tag was seen.

Contents
--------
* :class:`StickyEntry` / :class:`StickyBuffer` - ordered replay queue.
* :class:`PasteBuffer` - colour-free transcript of everything shown.
* :class:`TagCounter` - occurrences per declared tag.

System Role
-----------
Owned by a :class:`~cli_helpers.runtime.HelperRuntime`; filled by the router
and drained exactly once by the shutdown use case.
"""

from __future__ import annotations

import copy
from collections import Counter
from dataclasses import dataclass
from typing import Any, Iterable, Iterator

from .options import CallOptions


@dataclass(slots=True, frozen=True)
class StickyEntry:
    """Options and raw messages captured for replay."""

    options: CallOptions
    messages: tuple[Any, ...]


class StickyBuffer:
    """Ordered list of sticky messages replayed once at shutdown."""

    def __init__(self) -> None:
        self._entries: list[StickyEntry] = []
        self._drained = False

    def capture(self, options: CallOptions, messages: Iterable[Any]) -> StickyEntry:
        """Store a deep copy of ``messages`` with replay-safe ``options``."""

        entry = StickyEntry(options.for_replay(), tuple(copy.deepcopy(list(messages))))
        self._entries.append(entry)
        return entry

    def drain(self) -> list[StickyEntry]:
        """Return the stored entries once; later calls return an empty list."""

        if self._drained:
            return []
        self._drained = True
        entries, self._entries = self._entries, []
        return entries

    def __iter__(self) -> Iterator[StickyEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


class PasteBuffer:
    """Transcript of colour-stripped display lines for paste submission."""

    def __init__(self) -> None:
        self._lines: list[str] = []

    def extend(self, lines: Iterable[str]) -> None:
        self._lines.extend(lines)

    def snapshot(self) -> list[str]:
        """Return a copy of the current transcript."""

        return list(self._lines)

    def drain(self) -> list[str]:
        lines, self._lines = self._lines, []
        return lines

    def __len__(self) -> int:
        return len(self._lines)


class TagCounter:
    """Count how many messages declared each tag, shown or not."""

    def __init__(self) -> None:
        self._counts: Counter[str] = Counter()

    def increment(self, tag: str) -> int:
        self._counts[tag] += 1
        return self._counts[tag]

    def sorted_items(self) -> list[tuple[str, int]]:
        """Return ``(tag, count)`` pairs ordered by tag name."""

        return sorted(self._counts.items())

    def __getitem__(self, tag: str) -> int:
        return self._counts[tag]

    def __bool__(self) -> bool:
        return bool(self._counts)

    def __len__(self) -> int:
        return len(self._counts)


__all__ = ["PasteBuffer", "StickyBuffer", "StickyEntry", "TagCounter"]
