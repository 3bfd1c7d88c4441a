"""Static package metadata surfaced by the CLI banner.

Purpose
-------
Keep the distribution name, version and console-script name in one place so
``cli-helpers --version`` and ``cli-helpers info`` agree with the packaging
metadata.
"""

from __future__ import annotations

from importlib import metadata as _metadata

name = "cli_helpers"
title = "Terminal output, verbosity, syslog and prompt helpers for command-line scripts"
shell_command = "cli-helpers"
homepage = "https://pypi.org/project/cli-helpers/"
author = "cli-helpers contributors"

try:
    version = _metadata.version("cli-helpers")
except _metadata.PackageNotFoundError:  # pragma: no cover - running from a source checkout
    version = "0.0.0.dev0"


def summary_info() -> str:
    """Return the metadata banner printed by ``cli-helpers info``.

    >>> summary_info().splitlines()[0]
    'Info for cli_helpers:'
    """

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    return "\n".join(lines) + "\n"
