"""Use case fanning formatted output out to every configured sink.

Purpose
-------
Decide, for one already-formatted message, which sinks receive it (console,
data file, syslog), what must be remembered for shutdown (sticky replay,
paste transcript, tag counts), and keep a failure in one sink from affecting
any other.

Contents
--------
* :func:`create_route_output` - factory returning the router callable.
* :class:`OutputRouter` - the callable itself; one ordered pass per message.
* :data:`DATA_ADVISORY` - line prepended when data output reaches syslog.

System Role
-----------
Application-layer orchestrator invoked by the level filters in
:mod:`cli_helpers.application.use_cases.emit`. Nothing raised by an adapter
escapes :meth:`OutputRouter.__call__`.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from threading import RLock
from typing import Any

from cli_helpers.application.ports import ConsolePort, DataSinkPort, SyslogPort
from cli_helpers.domain import (
    CallOptions,
    Configuration,
    PasteBuffer,
    SinkState,
    StickyBuffer,
    SyslogSeverity,
    TagCounter,
    colorize,
    strip_color,
)

logger = logging.getLogger(__name__)

DATA_ADVISORY = "cli_helpers logging a data section, use --data-file to suppress this in syslog."

RouteResult = dict[str, Any]


@dataclass(frozen=True)
class _RouterToolkit:
    console: ConsolePort
    data_sink: DataSinkPort | None
    syslog: SyslogPort | None
    tags: TagCounter
    sticky: StickyBuffer
    paste: PasteBuffer


def create_route_output(
    *,
    console: ConsolePort,
    data_sink: DataSinkPort | None,
    syslog: SyslogPort | None,
    tags: TagCounter,
    sticky: StickyBuffer,
    paste: PasteBuffer,
) -> OutputRouter:
    """Build the router capturing the current sink wiring.

    Parameters
    ----------
    console:
        Adapter implementing :class:`ConsolePort`; always present.
    data_sink:
        Optional data file adapter; ``None`` when ``--data-file`` was not given
        or could not be opened.
    syslog:
        Optional syslog adapter; ``None`` when syslog mirroring is off.
    tags, sticky, paste:
        Process-wide buffers owned by the runtime.

    Examples
    --------
    >>> class Console:
    ...     def __init__(self):
    ...         self.lines = []
    ...     def emit(self, lines, *, stderr=False, clear=0):
    ...         self.lines.extend(lines)
    ...     def erase_previous_line(self):
    ...         pass
    >>> console = Console()
    >>> route = create_route_output(
    ...     console=console, data_sink=None, syslog=None,
    ...     tags=TagCounter(), sticky=StickyBuffer(), paste=PasteBuffer(),
    ... )
    >>> route(["hello"], ["hello"], CallOptions(), Configuration())["ok"]
    True
    >>> console.lines
    ['hello']
    """

    toolkit = _RouterToolkit(
        console=console,
        data_sink=data_sink,
        syslog=syslog,
        tags=tags,
        sticky=sticky,
        paste=paste,
    )
    return OutputRouter(toolkit)


class OutputRouter:
    """Apply the routing steps in order: tag gate, console, data or syslog, sticky, paste."""

    def __init__(self, toolkit: _RouterToolkit) -> None:
        self._toolkit = toolkit
        self._lock = RLock()

    @property
    def console(self) -> ConsolePort:
        return self._toolkit.console

    def __call__(
        self,
        lines: Sequence[str],
        fragments: Sequence[str | None],
        options: CallOptions,
        configuration: Configuration,
    ) -> RouteResult:
        with self._lock:
            if not _tag_gate_passes(self._toolkit, options, configuration):
                return {"ok": False, "reason": "tag_filtered", "sinks": ()}
            delivered: list[str] = []
            if _deliver_to_console(self._toolkit, lines, options, configuration):
                delivered.append("console")
            if _data_sink_applies(self._toolkit, options):
                if _deliver_to_data_sink(self._toolkit, self._toolkit.data_sink, fragments, configuration):
                    delivered.append("data")
            elif _deliver_to_syslog(self._toolkit, lines, options, configuration):
                delivered.append("syslog")
            if options.sticky:
                self._toolkit.sticky.capture(options, fragments)
                delivered.append("sticky")
            if configuration.nopaste:
                self._toolkit.paste.extend(strip_color(line) for line in lines)
                delivered.append("paste")
            return {"ok": True, "sinks": tuple(delivered)}


def _tag_gate_passes(toolkit: _RouterToolkit, options: CallOptions, configuration: Configuration) -> bool:
    if configuration.tags is None or options.tag is None:
        return True
    # Counted before filtering so the shutdown report lists suppressed tags too.
    toolkit.tags.increment(options.tag)
    return configuration.tag_allows(options.tag)


def _deliver_to_console(
    toolkit: _RouterToolkit,
    lines: Sequence[str],
    options: CallOptions,
    configuration: Configuration,
) -> bool:
    if configuration.quiet and not options.important:
        return False
    try:
        toolkit.console.emit(lines, stderr=options.stderr, clear=options.clear)
    except Exception:
        logger.warning("Console output failed", exc_info=True)
        return False
    return True


def _data_sink_applies(toolkit: _RouterToolkit, options: CallOptions) -> bool:
    sink = toolkit.data_sink
    return options.data and sink is not None and sink.state is SinkState.ENABLED


def _deliver_to_data_sink(
    toolkit: _RouterToolkit,
    sink: DataSinkPort | None,
    fragments: Sequence[str | None],
    configuration: Configuration,
) -> bool:
    if sink is None:
        return False
    try:
        sink.write_lines([fragment or "" for fragment in fragments])
    except Exception as exc:
        sink.disable()
        logger.warning("Data sink disabled after write failure", exc_info=True)
        _report(toolkit, configuration, f"Writing to the data file failed, data output disabled: {exc}")
        return False
    return True


def _effective_severity(options: CallOptions) -> SyslogSeverity:
    if options.syslog_level is not None:
        return options.syslog_level
    return SyslogSeverity.ERR if options.stderr else SyslogSeverity.NOTICE


def _deliver_to_syslog(
    toolkit: _RouterToolkit,
    lines: Sequence[str],
    options: CallOptions,
    configuration: Configuration,
) -> bool:
    syslog = toolkit.syslog
    if not configuration.syslog or syslog is None or options.suppress_syslog:
        return False
    if syslog.state is not SinkState.ENABLED:
        return False

    severity = _effective_severity(options)
    payload = list(lines)
    if options.data:
        payload.insert(0, DATA_ADVISORY)
    logger.debug("Syslogging %d lines at level %s", len(payload), severity.keyword)

    for line in payload:
        try:
            syslog.emit(severity, strip_color(line))
        except Exception as exc:
            # One failed message switches syslog off for the rest of the process.
            syslog.disable()
            logger.warning("Syslog disabled after transport failure", exc_info=True)
            _report(toolkit, configuration, f"syslog() failed: {exc}")
            return False
    return True


def _report(toolkit: _RouterToolkit, configuration: Configuration, message: str) -> None:
    """Write a red diagnostic to stderr through the console only."""

    try:
        toolkit.console.emit([colorize("red", message, enabled=configuration.color)], stderr=True)
    except Exception:
        logger.error("Unable to report diagnostic: %s", message, exc_info=True)


__all__ = ["DATA_ADVISORY", "OutputRouter", "RouteResult", "create_route_output"]
