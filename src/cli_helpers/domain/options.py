"""Per-call output options.

Purpose
-------
Replace the loosely typed option mapping of classic CLI helpers with an
explicit value object. Options are always passed as keyword arguments and
messages as positional arguments, so a mapping can never be mistaken for a
message.

Contents
--------
* :class:`CallOptions` frozen dataclass.
* :func:`CallOptions.from_kwargs` - validating constructor for façade calls.

System Role
-----------
Travels from the level filters through the formatter and the router; the
sticky buffer stores a replay-safe copy produced by :meth:`CallOptions.for_replay`.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

from .levels import SyslogSeverity


@dataclass(slots=True, frozen=True)
class CallOptions:
    """Formatting and routing hints for a single output call.

    ``no_syslog`` is tri-state: ``None`` means "not decided by the caller" so
    :func:`debug` can apply the configured default.
    """

    color: str | None = None
    indent: int = 0
    clear: int = 0
    kv: bool = False
    stderr: bool = False
    important: bool = False
    level: int | None = None
    syslog_level: SyslogSeverity | None = None
    no_syslog: bool | None = None
    sticky: bool = False
    data: bool = False
    tag: str | None = None
    caller_class: str | None = None
    yaml: bool = False

    def __post_init__(self) -> None:
        if self.indent < 0:
            raise ValueError("indent must be zero or positive")
        if self.clear < 0:
            raise ValueError("clear must be zero or positive")
        if self.syslog_level is not None and not isinstance(self.syslog_level, SyslogSeverity):
            object.__setattr__(self, "syslog_level", SyslogSeverity.from_name(self.syslog_level))

    @classmethod
    def from_kwargs(cls, options: Mapping[str, Any]) -> CallOptions:
        """Build options from façade keyword arguments.

        Raises
        ------
        TypeError
            When an option name is not recognised.

        Examples
        --------
        >>> CallOptions.from_kwargs({"color": "green", "indent": 1}).indent
        1
        >>> CallOptions.from_kwargs({"colour": "green"})
        Traceback (most recent call last):
        ...
        TypeError: Unknown output option(s): colour
        """

        unknown = sorted(set(options) - _FIELD_NAMES)
        if unknown:
            raise TypeError(f"Unknown output option(s): {', '.join(unknown)}")
        return cls(**options)

    def merged(self, **changes: Any) -> CallOptions:
        """Return a copy with ``changes`` applied."""

        return replace(self, **changes)

    def with_defaults(self, **defaults: Any) -> CallOptions:
        """Return a copy where only unset (``None``) fields take ``defaults``."""

        missing = {key: value for key, value in defaults.items() if getattr(self, key) is None}
        return replace(self, **missing) if missing else self

    def for_replay(self) -> CallOptions:
        """Return the copy stored in the sticky buffer.

        Sticky and data markers are dropped so the replay is not captured or
        written again, and syslog is suppressed so shutdown does not log twice.
        """

        return replace(self, sticky=False, data=False, no_syslog=True)

    @property
    def suppress_syslog(self) -> bool:
        return bool(self.no_syslog)


_FIELD_NAMES = frozenset(item.name for item in fields(CallOptions))


__all__ = ["CallOptions"]
