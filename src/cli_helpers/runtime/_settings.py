"""Flag parsing and configuration resolution for the runtime façade.

Purpose
-------
Turn a command line (plus environment variables and the git colour probe)
into one immutable :class:`~cli_helpers.domain.Configuration`.

Contents
--------
* :data:`FLAG_OPTIONS` - the click options shared by :func:`parse_flags` and
  :func:`cli_helpers.runtime.helper_options`.
* :func:`parse_flags` - pass-through parsing of the standard flags.
* :func:`build_configuration` - precedence resolution (flag, environment,
  probe, default).
* :func:`git_color_check` - ``git config --global --get color.ui`` probe.

System Role
-----------
Only the composition root calls into this module; the inner layers receive
the finished :class:`Configuration`.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any

import click

from cli_helpers.domain import DEFAULT_KV_FORMAT, Configuration

logger = logging.getLogger(__name__)

ENV_COLOR = "CLI_HELPERS_COLOR"
ENV_VERBOSE = "CLI_HELPERS_VERBOSE"
ENV_DEBUG = "CLI_HELPERS_DEBUG"
ENV_QUIET = "CLI_HELPERS_QUIET"
ENV_NOPASTE_SERVICES = "NOPASTE_SERVICES"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_GIT_COLOR_COMMAND = ("git", "config", "--global", "--get", "color.ui")

FLAG_OPTIONS: tuple[Callable[[Callable[..., Any]], Callable[..., Any]], ...] = (
    click.option("--color/--no-color", "color", default=None, help="Colourise output (default: follow git's color.ui)."),
    click.option("-v", "--verbose", count=True, help="Increase verbosity; repeat for more detail."),
    click.option("--debug", is_flag=True, default=False, help="Show developer output."),
    click.option("--debug-class", default=None, help="Show debug output from this caller class only ('all' for every class)."),
    click.option("--quiet", is_flag=True, default=False, help="Suppress output not marked important."),
    click.option(
        "--data-file",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Write lines flagged as data to this file.",
    ),
    click.option("--syslog/--no-syslog", default=False, help="Mirror output to syslog."),
    click.option("--syslog-facility", default=None, help="Syslog facility (default: local0)."),
    click.option("--syslog-tag", default=None, help="Syslog program tag (default: the script name)."),
    click.option("--syslog-debug/--no-syslog-debug", default=False, help="Send debug output to syslog as well."),
    click.option("--tags", default=None, help="Comma separated list of tags to display."),
    click.option("--nopaste", is_flag=True, default=False, help="Paste the output transcript at exit."),
    click.option("--nopaste-public", is_flag=True, default=False, help="Request a public paste."),
    click.option(
        "--nopaste-service",
        multiple=True,
        help="Paste service to use (dpaste, paste.rs); repeatable or comma separated.",
    ),
    click.option(
        "--use-dotenv/--no-use-dotenv",
        default=None,
        help="Load a .env file before resolving environment variables.",
    ),
)

FLAG_NAMES = frozenset(
    {
        "color",
        "verbose",
        "debug",
        "debug_class",
        "quiet",
        "data_file",
        "syslog",
        "syslog_facility",
        "syslog_tag",
        "syslog_debug",
        "tags",
        "nopaste",
        "nopaste_public",
        "nopaste_service",
        "use_dotenv",
    }
)


def apply_flag_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorate ``func`` with every option in :data:`FLAG_OPTIONS`."""

    for option in reversed(FLAG_OPTIONS):
        func = option(func)
    return func


@click.command(
    name="cli-helpers-flags",
    add_help_option=False,
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
)
@apply_flag_options
def _flag_parser(**flags: Any) -> dict[str, Any]:  # pragma: no cover - never invoked
    return flags


def parse_flags(argv: Sequence[str]) -> tuple[dict[str, Any], list[str]]:
    """Pick the standard flags out of ``argv`` and return them with the rest.

    Unknown options and positional arguments are passed through untouched.
    Unset flags are reported as ``None`` (``()`` for repeatable ones) so the
    environment and the probes can fill them in later.

    Examples
    --------
    >>> flags, rest = parse_flags(["-vv", "--color", "input.txt", "--mine"])
    >>> flags["verbose"], flags["color"], rest
    (2, True, ['input.txt', '--mine'])
    """

    try:
        ctx = _flag_parser.make_context("cli-helpers", list(argv), resilient_parsing=True)
    except click.ClickException as exc:
        logger.warning("Ignoring unparsable helper flags: %s", exc.format_message())
        return {}, list(argv)
    return dict(ctx.params), list(ctx.args)


def git_color_check(runner: Callable[..., subprocess.CompletedProcess[str]] = subprocess.run) -> bool:
    """Return ``True`` when git's global ``color.ui`` is ``auto`` or ``true``."""

    try:
        result = runner(list(_GIT_COLOR_COMMAND), capture_output=True, text=True, check=False, timeout=5)
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("git_color_check error: %s", exc)
        return False
    if result.stderr:
        logger.debug("git_color_check error: %s", result.stderr.strip())
        return False
    logger.debug("git_color_check out: %s", result.stdout.strip())
    return "auto" in result.stdout or "true" in result.stdout


def _env_bool(environ: Mapping[str, str], name: str) -> bool | None:
    """Return the boolean value of ``name`` or ``None`` when unset or empty.

    >>> _env_bool({"X": "On"}, "X"), _env_bool({"X": "0"}, "X"), _env_bool({}, "X")
    (True, False, None)
    """

    value = environ.get(name)
    if value is None or not value.strip():
        return None
    return value.strip().lower() in _TRUE_VALUES


def _env_int(environ: Mapping[str, str], name: str) -> int | None:
    value = environ.get(name)
    if value is None or not value.strip():
        return None
    try:
        return max(int(value.strip()), 0)
    except ValueError:
        logger.warning("Ignoring %s=%r; expected an integer", name, value)
        return None


def _split_list(values: str | Sequence[str] | None) -> tuple[str, ...]:
    """Flatten comma separated entries, dropping blanks.

    >>> _split_list(["dpaste, paste.rs", "", "dpaste"])
    ('dpaste', 'paste.rs', 'dpaste')
    """

    if not values:
        return ()
    if isinstance(values, str):
        values = [values]
    items: list[str] = []
    for value in values:
        items.extend(part.strip() for part in value.split(",") if part.strip())
    return tuple(items)


def _text_or_none(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def build_configuration(
    *,
    argv: Sequence[str] | None = None,
    program: str | None = None,
    environ: Mapping[str, str] | None = None,
    color_probe: Callable[[], bool] | None = None,
    kv_format: str = DEFAULT_KV_FORMAT,
    encoding: str = "json",
    **flags: Any,
) -> Configuration:
    """Resolve ``flags`` into a :class:`Configuration`.

    Parameters
    ----------
    argv:
        Command line copy exposed through ``copy_argv`` (defaults to
        ``sys.argv[1:]``).
    program:
        Script name used as the default syslog tag (defaults to the basename
        of ``sys.argv[0]``).
    environ:
        Environment mapping; ``os.environ`` when omitted.
    color_probe:
        Called only when neither the flag nor ``CLI_HELPERS_COLOR`` decided
        the colour setting; :func:`git_color_check` by default.
    flags:
        Values as produced by :func:`parse_flags`. Unknown names raise
        :class:`TypeError`.

    Examples
    --------
    >>> cfg = build_configuration(verbose=2, tags="a,b", environ={}, color_probe=lambda: False, program="tool")
    >>> cfg.verbose, sorted(cfg.tags), cfg.syslog_tag, cfg.color
    (2, ['a', 'b'], 'tool', False)
    """

    unknown = sorted(set(flags) - FLAG_NAMES)
    if unknown:
        raise TypeError(f"Unknown helper flag(s): {', '.join(unknown)}")

    env = os.environ if environ is None else environ
    if argv is None:
        argv = sys.argv[1:]
    if program is None:
        program = Path(sys.argv[0]).name if sys.argv and sys.argv[0] else "cli-helpers"

    color = flags.get("color")
    if color is None:
        color = _env_bool(env, ENV_COLOR)
    if color is None:
        color = (color_probe or git_color_check)()

    verbose = flags.get("verbose") or _env_int(env, ENV_VERBOSE) or 0
    debug = bool(flags.get("debug")) or bool(_env_bool(env, ENV_DEBUG))
    quiet = bool(flags.get("quiet")) or bool(_env_bool(env, ENV_QUIET))

    raw_tags = _split_list(flags.get("tags"))
    services = _split_list(flags.get("nopaste_service")) or _split_list(env.get(ENV_NOPASTE_SERVICES))
    data_file = flags.get("data_file")

    return Configuration(
        debug=debug,
        debug_class=_text_or_none(flags.get("debug_class")) or "main",
        verbose=int(verbose),
        color=bool(color),
        quiet=quiet,
        syslog=bool(flags.get("syslog")),
        syslog_facility=_text_or_none(flags.get("syslog_facility")) or "local0",
        syslog_tag=_text_or_none(flags.get("syslog_tag")) or program,
        syslog_debug=bool(flags.get("syslog_debug")),
        tags=frozenset(raw_tags) if raw_tags else None,
        data_file=Path(data_file) if data_file else None,
        nopaste=bool(flags.get("nopaste")),
        nopaste_public=bool(flags.get("nopaste_public")),
        nopaste_services=services,
        kv_format=kv_format,
        encoding=encoding,
        argv=tuple(argv),
    )


__all__ = [
    "ENV_COLOR",
    "ENV_DEBUG",
    "ENV_NOPASTE_SERVICES",
    "ENV_QUIET",
    "ENV_VERBOSE",
    "FLAG_NAMES",
    "FLAG_OPTIONS",
    "apply_flag_options",
    "build_configuration",
    "git_color_check",
    "parse_flags",
]
