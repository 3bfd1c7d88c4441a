"""Runtime façade exposing the script-facing helper functions.

Purpose
-------
Give scripts a handful of plain functions (``output``, ``verbose``,
``debug``, ``debug_var``, the prompts, ``setting``, ``copy_argv``) backed by
one process-wide :class:`HelperRuntime`. The runtime is built on first use
from ``sys.argv`` unless :func:`init` or :func:`helper_options` created it
already.

Contents
--------
* :func:`init` / :func:`shutdown` - explicit lifecycle of the singleton.
* Output functions - messages are positional, options are keywords.
* Prompt functions - thin wrappers around :class:`~cli_helpers.application.use_cases.Prompter`.
* :func:`helper_options` - click decorator installing the standard flags.

System Role
-----------
Outer shell of the library. Everything below it can be used without the
singleton by building a :class:`HelperRuntime` with :func:`build_runtime`.
"""

from __future__ import annotations

import atexit
import functools
import os
import sys
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

import click

from cli_helpers import config as helper_config
from cli_helpers.application.ports import ConsolePort, LineReaderPort
from cli_helpers.application.use_cases.prompts import Validators
from cli_helpers.application.use_cases.route_output import RouteResult
from cli_helpers.domain import CallOptions, Configuration, colorize as _colorize, strip_color

from . import _state as _state_module
from ._composition import build_runtime
from ._settings import FLAG_NAMES, apply_flag_options, build_configuration, git_color_check, parse_flags
from ._state import HelperRuntime, clear_runtime, current_runtime, is_initialised, set_runtime

_ATEXIT_REGISTERED = False


def init(
    argv: Sequence[str] | None = None,
    *,
    flags: Mapping[str, Any] | None = None,
    program: str | None = None,
    environ: Mapping[str, str] | None = None,
    color_probe: Callable[[], bool] | None = None,
    console: ConsolePort | None = None,
    reader: LineReaderPort | None = None,
    register_atexit: bool = True,
    **runtime_options: Any,
) -> HelperRuntime:
    """Build the process-wide runtime and install it as the singleton.

    Parameters
    ----------
    argv:
        Command line to parse (``sys.argv[1:]`` when omitted). Unknown
        arguments are ignored.
    flags:
        Already-parsed flag values; when given, ``argv`` is only recorded
        for :func:`copy_argv`.
    register_atexit:
        Run :func:`shutdown` at interpreter exit.
    runtime_options:
        Forwarded to :func:`build_runtime` (``syslog_sender``, ``paste``...).

    Raises
    ------
    RuntimeError
        When a runtime is already installed.
    """

    with _state_module._STATE_LOCK:
        if is_initialised():
            raise RuntimeError("cli_helpers.init() cannot be called twice without shutdown()")
        argv = list(sys.argv[1:] if argv is None else argv)
        if flags is None:
            flags, _ = parse_flags(argv)
        flags = dict(flags)

        env = os.environ if environ is None else environ
        if helper_config.should_use_dotenv(flags.pop("use_dotenv", None), env.get(helper_config.DOTENV_ENV_VAR)):
            helper_config.enable_dotenv()

        configuration = build_configuration(
            argv=argv,
            program=program,
            environ=environ,
            color_probe=color_probe,
            **flags,
        )
        runtime = build_runtime(configuration, console=console, reader=reader, **runtime_options)
        set_runtime(runtime)
        if register_atexit:
            _register_atexit()
        return runtime


def shutdown() -> None:
    """Emit the shutdown report of the active runtime and uninstall it."""

    with _state_module._STATE_LOCK:
        if not is_initialised():
            return
        runtime = current_runtime()
        clear_runtime()
    runtime.shutdown()


def _register_atexit() -> None:
    global _ATEXIT_REGISTERED
    if not _ATEXIT_REGISTERED:
        atexit.register(shutdown)
        _ATEXIT_REGISTERED = True


def _runtime() -> HelperRuntime:
    with _state_module._STATE_LOCK:
        if is_initialised():
            return current_runtime()
        return init()


def _caller_class(depth: int = 2) -> str:
    """Return the module name of the code calling the façade function."""

    try:
        frame = sys._getframe(depth)
    except ValueError:
        return "main"
    name = frame.f_globals.get("__name__", "__main__")
    return "main" if name == "__main__" else name


def _dispatch(entry_point: str, messages: Sequence[Any], options: Mapping[str, Any]) -> RouteResult | None:
    """Build the call options and hand the messages to an :class:`Emitter` entry point.

    Invalid option values are reported on stderr instead of raised; unknown
    option names still raise ``TypeError``.
    """

    emitter = _runtime().emitter
    try:
        call_options = CallOptions.from_kwargs(options)
    except ValueError as exc:
        return emitter.reject_options(exc)
    return getattr(emitter, entry_point)(call_options, messages)


def output(*messages: Any, **options: Any) -> RouteResult | None:
    """Format ``messages`` and send them to every configured sink.

    Examples
    --------
    >>> from io import StringIO
    >>> from rich.console import Console
    >>> from cli_helpers.adapters import RichConsoleAdapter
    >>> out = Console(file=StringIO(), no_color=True)
    >>> _ = init([], color_probe=lambda: False, console=RichConsoleAdapter(stdout=out), register_atexit=False)
    >>> _ = output("Hello, World!", color="green")
    >>> out.file.getvalue()
    'Hello, World!\\n'
    >>> shutdown()
    """

    return _dispatch("output", messages, options)


def verbose(*messages: Any, **options: Any) -> RouteResult | None:
    """Output only when ``-v`` was given at least ``level`` times (default 1)."""

    return _dispatch("verbose", messages, options)


def debug(*messages: Any, **options: Any) -> RouteResult | None:
    """Output only with ``--debug``; the calling module must match ``--debug-class``."""

    options.setdefault("caller_class", _caller_class())
    return _dispatch("debug", messages, options)


def debug_var(value: Any, **options: Any) -> RouteResult | None:
    """Dump ``value`` (JSON, or YAML with ``yaml=True``) as debug output."""

    caller_class = options.pop("caller_class", None) or _caller_class()
    return _runtime().emitter.debug_var(value, caller_class=caller_class, **options)


def override(name: str, value: Any) -> Configuration:
    """Change ``debug`` or ``verbose`` for the rest of the run."""

    return _runtime().emitter.override(name, value)


def confirm(question: str) -> bool:
    return _runtime().prompter.confirm(question)


def text_input(
    question: str,
    *,
    default: str | None = None,
    validate: Validators | None = None,
    noecho: bool = False,
    erase: bool = False,
) -> str:
    return _runtime().prompter.text_input(question, default=default, validate=validate, noecho=noecho, erase=erase)


def menu(question: str, choices: Mapping[Any, Any] | Iterable[Any]) -> Any:
    return _runtime().prompter.menu(question, choices)


def pwprompt(prompt: str = "Password: ", *, validate: Validators | None = None, erase: bool = False) -> str:
    return _runtime().prompter.pwprompt(prompt, validate=validate, erase=erase)


def prompt(question: str, **kwargs: Any) -> Any:
    """Ask ``question`` as a yes/no (``yn=True``), menu (``menu=...``) or text prompt."""

    return _runtime().prompter.prompt(question, **kwargs)


def setting(name: str) -> Any:
    """Return the resolved setting ``name`` (``"VERBOSE"``, ``"kv_format"``...) or ``None``."""

    return _runtime().setting(name)


def copy_argv() -> list[str]:
    """Return the command line as it was before the helper flags were parsed."""

    return _runtime().copy_argv()


def colorize(color: str | None, text: str) -> str:
    """Colour ``text`` when the active configuration enables colour."""

    return _colorize(color, text, enabled=_runtime().configuration.color)


def helper_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Install the standard helper flags on a click command.

    The runtime is initialised from the parsed flags before the command body
    runs and shut down when the click context closes.

    Examples
    --------
    >>> @click.command()
    ... @helper_options
    ... def tool():
    ...     output("done")
    >>> sorted(p.name for p in tool.params)[:3]
    ['color', 'data_file', 'debug']
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        flags = {name: kwargs.pop(name) for name in FLAG_NAMES if name in kwargs}
        ctx = click.get_current_context()
        if is_initialised():
            shutdown()
        init(flags=flags)
        ctx.call_on_close(shutdown)
        return func(*args, **kwargs)

    return apply_flag_options(wrapper)


__all__ = [
    "HelperRuntime",
    "build_configuration",
    "build_runtime",
    "colorize",
    "confirm",
    "copy_argv",
    "current_runtime",
    "debug",
    "debug_var",
    "git_color_check",
    "helper_options",
    "init",
    "is_initialised",
    "menu",
    "output",
    "override",
    "parse_flags",
    "prompt",
    "pwprompt",
    "setting",
    "shutdown",
    "strip_color",
    "text_input",
    "verbose",
]
