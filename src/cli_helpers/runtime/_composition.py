"""Runtime composition helpers wiring domain, application, and adapters.

Purpose
-------
Translate a resolved :class:`~cli_helpers.domain.Configuration` into a live
:class:`HelperRuntime`. Each optional sink (data file, syslog, paste) is
opened here; when one cannot be set up the feature is disabled and a single
red line says why.

Contents
--------
* :func:`build_runtime` - the composition root used by the façade and tests.

System Role
-----------
Anchors the clean-architecture boundary: adapters are chosen and injected
here, while :mod:`cli_helpers.runtime` exposes only the façade functions.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TextIO

from cli_helpers.adapters import (
    DataFileAdapter,
    JsonEncoder,
    RichConsoleAdapter,
    SyslogAdapter,
    TerminalLineReader,
    YamlEncoder,
)
from cli_helpers.adapters.structured.syslog import Closer, Opener, Sender
from cli_helpers.application.ports import ConsolePort, DataSinkPort, LineReaderPort, PastePort, SyslogPort
from cli_helpers.application.use_cases import Emitter, Prompter, create_route_output, create_shutdown
from cli_helpers.domain import CallOptions, Configuration, PasteBuffer, StickyBuffer, TagCounter

from ._state import HelperRuntime

logger = logging.getLogger(__name__)

_LIBRARY_CLASS = "cli_helpers"


def build_runtime(
    configuration: Configuration,
    *,
    console: ConsolePort | None = None,
    reader: LineReaderPort | None = None,
    syslog: SyslogPort | None = None,
    syslog_sender: Sender | None = None,
    syslog_opener: Opener | None = None,
    syslog_closer: Closer | None = None,
    paste: PastePort | None = None,
    data_stream: TextIO | None = None,
) -> HelperRuntime:
    """Assemble a runtime from resolved settings.

    Parameters
    ----------
    configuration:
        Output of :func:`cli_helpers.runtime.build_configuration`.
    console, reader, syslog, paste:
        Optional replacements for the default adapters.
    syslog_sender, syslog_opener, syslog_closer:
        Hooks handed to the default :class:`SyslogAdapter`.
    data_stream:
        Already-open stream used instead of opening ``configuration.data_file``.
    """

    console = console or RichConsoleAdapter(color=configuration.color)
    startup_errors: list[str] = []
    sticky_errors: list[str] = []

    data_sink = _open_data_sink(configuration, data_stream, startup_errors)
    syslog_port: SyslogPort | None = None
    if configuration.syslog:
        syslog_port = _open_syslog(configuration, syslog, syslog_sender, syslog_opener, syslog_closer, startup_errors)
        if syslog_port is None:
            configuration = replace(configuration, syslog=False)
    if configuration.nopaste and paste is None and configuration.nopaste_services:
        paste = _create_paste(configuration, sticky_errors)
        if paste is None:
            configuration = replace(configuration, nopaste=False)

    tags = TagCounter()
    sticky = StickyBuffer()
    paste_buffer = PasteBuffer()
    router = create_route_output(
        console=console,
        data_sink=data_sink,
        syslog=syslog_port,
        tags=tags,
        sticky=sticky,
        paste=paste_buffer,
    )
    emitter = Emitter(
        configuration=configuration,
        route=router,
        encoders={"json": JsonEncoder(), "yaml": YamlEncoder()},
    )
    prompter = Prompter(emitter=emitter, reader=reader or TerminalLineReader(), console=console)
    shutdown_hook = create_shutdown(
        emitter=emitter,
        tags=tags,
        sticky=sticky,
        paste_buffer=paste_buffer,
        paste=paste,
        syslog=syslog_port,
    )

    for message in startup_errors:
        emitter.report_error(message)
    for message in sticky_errors:
        emitter.output(CallOptions(color="red", stderr=True, sticky=True), [message])

    emitter.debug(CallOptions(color="magenta", caller_class=_LIBRARY_CLASS), ["cli_helpers definitions"])
    emitter.debug_var(configuration.to_dict(), caller_class=_LIBRARY_CLASS)

    return HelperRuntime(
        emitter=emitter,
        router=router,
        prompter=prompter,
        console=console,
        data_sink=data_sink,
        syslog=syslog_port,
        tags=tags,
        sticky=sticky,
        paste_buffer=paste_buffer,
        shutdown_hook=shutdown_hook,
    )


def _open_data_sink(
    configuration: Configuration,
    data_stream: TextIO | None,
    errors: list[str],
) -> DataSinkPort | None:
    if data_stream is not None:
        return DataFileAdapter(stream=data_stream)
    if configuration.data_file is None:
        return None
    sink = DataFileAdapter(path=configuration.data_file)
    try:
        sink.open()
    except Exception as exc:
        logger.warning("Data file unavailable", exc_info=True)
        errors.append(str(exc))
        return None
    return sink


def _open_syslog(
    configuration: Configuration,
    syslog: SyslogPort | None,
    sender: Sender | None,
    opener: Opener | None,
    closer: Closer | None,
    errors: list[str],
) -> SyslogPort | None:
    if syslog is None:
        syslog = SyslogAdapter(
            tag=configuration.syslog_tag,
            facility=configuration.syslog_facility,
            sender=sender,
            opener=opener,
            closer=closer,
        )
    try:
        syslog.open()
    except Exception as exc:
        logger.warning("Syslog unavailable", exc_info=True)
        errors.append(f"cli_helpers could not open syslog: {exc}")
        return None
    return syslog


def _create_paste(configuration: Configuration, errors: list[str]) -> PastePort | None:
    try:
        from cli_helpers.adapters.paste import PasteAdapter
    except ImportError as exc:
        logger.warning("Paste support unavailable", exc_info=True)
        errors.append(f"--nopaste requires the requests package: {exc}")
        return None
    try:
        return PasteAdapter(services=configuration.nopaste_services)
    except ValueError as exc:
        errors.append(f"--nopaste disabled: {exc}")
        return None


__all__ = ["build_runtime"]
