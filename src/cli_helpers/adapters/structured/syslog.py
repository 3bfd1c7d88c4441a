"""Syslog adapter mirroring display lines to the local syslog daemon.

Purpose
-------
Send each colour-stripped display line as its own syslog message, using the
configured program tag and facility.

Contents
--------
* :func:`facility_code` - facility keyword to ``LOG_*`` value.
* :class:`SyslogAdapter` - concrete :class:`SyslogPort` implementation.

System Role
-----------
Owns the one-shot circuit breaker state: once :meth:`SyslogAdapter.disable`
runs, nothing else is sent for the rest of the process.
"""

from __future__ import annotations

from typing import Callable

from cli_helpers.application.ports.syslog import SyslogPort
from cli_helpers.domain.levels import SinkState, SyslogSeverity

Sender = Callable[[int, str], None]
Opener = Callable[[str, int], None]
Closer = Callable[[], None]

_FACILITIES = {
    "kern": 0,
    "user": 1,
    "mail": 2,
    "daemon": 3,
    "auth": 4,
    "syslog": 5,
    "lpr": 6,
    "news": 7,
    "uucp": 8,
    "cron": 9,
    "authpriv": 10,
    "ftp": 11,
    "local0": 16,
    "local1": 17,
    "local2": 18,
    "local3": 19,
    "local4": 20,
    "local5": 21,
    "local6": 22,
    "local7": 23,
}
#: RFC 5424 facility numbers; the ``LOG_*`` constants are these shifted left by three.


def _syslog_module():  # pragma: no cover - platform specific
    try:
        import syslog
    except ImportError as exc:  # pragma: no cover - executed only on Windows
        raise RuntimeError("syslog is not available on this platform") from exc
    return syslog


def facility_code(name: str) -> int:
    """Return the ``LOG_*`` facility constant for ``name``.

    >>> facility_code("local0"), facility_code("USER")
    (128, 8)
    """

    try:
        return _FACILITIES[name.strip().lower()] << 3
    except KeyError as exc:
        raise ValueError(f"Unknown syslog facility: {name!r}") from exc


def _default_opener(tag: str, facility: int) -> None:  # pragma: no cover - depends on syslog
    module = _syslog_module()
    module.openlog(ident=tag, logoption=module.LOG_PID | module.LOG_NDELAY, facility=facility)


def _default_sender(priority: int, message: str) -> None:  # pragma: no cover - depends on syslog
    _syslog_module().syslog(priority, message)


def _default_closer() -> None:  # pragma: no cover - depends on syslog
    _syslog_module().closelog()


class SyslogAdapter(SyslogPort):
    """Emit display lines via the :mod:`syslog` module or supplied callables."""

    def __init__(
        self,
        *,
        tag: str,
        facility: str = "local0",
        sender: Sender | None = None,
        opener: Opener | None = None,
        closer: Closer | None = None,
    ) -> None:
        """Store the channel identity; nothing is opened until :meth:`open`."""
        self._tag = tag
        self._facility = facility
        self._sender = sender or _default_sender
        self._opener = opener or _default_opener
        self._closer = closer or _default_closer
        self._state = SinkState.DISABLED
        self._opened = False

    @property
    def state(self) -> SinkState:
        return self._state

    @property
    def tag(self) -> str:
        return self._tag

    def open(self) -> None:
        """Open the channel; raises when the facility is unknown or syslog is unavailable."""
        self._opener(self._tag, facility_code(self._facility))
        self._opened = True
        self._state = SinkState.ENABLED

    def emit(self, severity: SyslogSeverity, message: str) -> None:
        """Send ``message`` at ``severity``; no-op once disabled."""
        if self._state is not SinkState.ENABLED:
            return
        self._sender(severity.priority, message)

    def disable(self) -> None:
        self._state = SinkState.DISABLED

    def close(self) -> None:
        if not self._opened:
            return
        self._opened = False
        self._state = SinkState.DISABLED
        self._closer()


__all__ = ["SyslogAdapter", "facility_code"]
