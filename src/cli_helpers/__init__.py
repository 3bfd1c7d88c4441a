"""Terminal output helpers for command-line scripts.

Scripts call :func:`output`, :func:`verbose` and :func:`debug` instead of
``print``; the standard flags (``--verbose``, ``--debug``, ``--quiet``,
``--color``, ``--syslog``, ``--data-file``, ``--tags``, ``--nopaste``) then
decide what is shown, where it goes and what is remembered for the end of
the run. Interactive prompts share the same output path for their errors.
"""

from __future__ import annotations

from .domain import CallOptions, CLIHelpersError, Configuration, PasteError, PromptAborted, strip_color
from .runtime import (
    HelperRuntime,
    build_configuration,
    build_runtime,
    colorize,
    confirm,
    copy_argv,
    debug,
    debug_var,
    helper_options,
    init,
    menu,
    output,
    override,
    parse_flags,
    prompt,
    pwprompt,
    setting,
    shutdown,
    text_input,
    verbose,
)

__all__ = [
    "CLIHelpersError",
    "CallOptions",
    "Configuration",
    "HelperRuntime",
    "PasteError",
    "PromptAborted",
    "build_configuration",
    "build_runtime",
    "colorize",
    "confirm",
    "copy_argv",
    "debug",
    "debug_var",
    "helper_options",
    "init",
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
