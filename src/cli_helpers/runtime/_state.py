"""Runtime state container and access helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import RLock
from typing import Any, Callable

from cli_helpers.application.ports import ConsolePort, DataSinkPort, SyslogPort
from cli_helpers.application.use_cases import Emitter, OutputRouter, Prompter
from cli_helpers.domain import Configuration, PasteBuffer, StickyBuffer, TagCounter


@dataclass(slots=True)
class HelperRuntime:
    """Aggregate of live collaborators assembled by the composition root.

    Every façade function delegates to one of these objects. Tests build
    their own instances through :func:`cli_helpers.runtime.build_runtime`
    and call the methods directly instead of going through the singleton.
    """

    emitter: Emitter
    router: OutputRouter
    prompter: Prompter
    console: ConsolePort
    data_sink: DataSinkPort | None
    syslog: SyslogPort | None
    tags: TagCounter
    sticky: StickyBuffer
    paste_buffer: PasteBuffer
    shutdown_hook: Callable[[], None]
    _closed: bool = field(default=False, repr=False)

    @property
    def configuration(self) -> Configuration:
        return self.emitter.configuration

    @property
    def closed(self) -> bool:
        return self._closed

    def setting(self, name: str) -> Any:
        """Return the resolved setting ``name`` (case-insensitive) or ``None``."""

        return self.configuration.lookup(name)

    def copy_argv(self) -> list[str]:
        """Return the command line as it was before flag parsing."""

        return list(self.configuration.argv)

    def shutdown(self) -> None:
        """Run the shutdown report once; later calls do nothing."""

        if self._closed:
            return
        self._closed = True
        self.shutdown_hook()


_STATE: HelperRuntime | None = None
_STATE_LOCK = RLock()


def set_runtime(runtime: HelperRuntime) -> None:
    """Install ``runtime`` as the active singleton."""

    with _STATE_LOCK:
        global _STATE
        _STATE = runtime


def clear_runtime() -> None:
    """Remove the active runtime if present."""

    with _STATE_LOCK:
        global _STATE
        _STATE = None


def current_runtime() -> HelperRuntime:
    """Return the active runtime or raise when uninitialised."""

    with _STATE_LOCK:
        if _STATE is None:
            raise RuntimeError("cli_helpers.init() must be called before using the runtime")
        return _STATE


def is_initialised() -> bool:
    """Return ``True`` when :func:`cli_helpers.init` has been called."""

    with _STATE_LOCK:
        return _STATE is not None


__all__ = [
    "HelperRuntime",
    "clear_runtime",
    "current_runtime",
    "is_initialised",
    "set_runtime",
]
