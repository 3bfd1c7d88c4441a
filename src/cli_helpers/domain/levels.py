"""Syslog severities and sink states shared by the router and its adapters.

Purpose
-------
Offer a domain-specific representation of the syslog severities a caller may
request per message, together with the numeric priorities the transport
expects.

Contents
--------
* :class:`SyslogSeverity` enum with name parsing and priority lookup.
* :class:`SinkState` enum modelling the one-shot syslog circuit breaker.

System Role
-----------
Used by the level filters to derive default severities and by the syslog
adapter to translate them into ``syslog`` priorities.
"""

from __future__ import annotations

from enum import Enum


class SyslogSeverity(Enum):
    """Severities accepted by the ``syslog_level`` call option."""

    EMERG = 0
    ALERT = 1
    CRIT = 2
    ERR = 3
    WARNING = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7

    @property
    def keyword(self) -> str:
        """Return the lowercase keyword used in option values and diagnostics."""

        return self.name.lower()

    @property
    def priority(self) -> int:
        """Return the numeric syslog priority (``LOG_*`` constant value)."""

        return self.value

    @classmethod
    def from_name(cls, name: str | SyslogSeverity) -> SyslogSeverity:
        if isinstance(name, SyslogSeverity):
            return name
        normalized = name.strip().upper()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown syslog level: {name!r}") from exc


_ALIASES = {
    "ERROR": "ERR",
    "WARN": "WARNING",
    "CRITICAL": "CRIT",
    "EMERGENCY": "EMERG",
    "PANIC": "EMERG",
}
# Spellings accepted on top of the canonical syslog keywords.


class SinkState(Enum):
    """Lifecycle of a sink that may be switched off for the rest of the process."""

    ENABLED = "enabled"
    DISABLED = "disabled"


__all__ = ["SinkState", "SyslogSeverity"]
