"""Port describing the syslog transport."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from cli_helpers.domain.levels import SinkState, SyslogSeverity


@runtime_checkable
class SyslogPort(Protocol):
    """Forward single messages to syslog at a given severity.

    ``state`` starts as :attr:`SinkState.ENABLED` once :meth:`open` succeeds
    and moves to :attr:`SinkState.DISABLED` at most once.
    """

    @property
    def state(self) -> SinkState: ...

    def open(self) -> None:
        """Open the channel with the configured tag and facility."""

    def emit(self, severity: SyslogSeverity, message: str) -> None:
        """Send ``message``; raise on transport failure."""

    def disable(self) -> None:
        """Trip the circuit breaker; no further messages are sent."""

    def close(self) -> None:
        """Close the channel if it is open."""


__all__ = ["SyslogPort"]
