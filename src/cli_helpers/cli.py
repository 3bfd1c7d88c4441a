"""Command-line demo wiring the helper flags into a click group.

Purpose
-------
Show the helpers working end to end: the group installs the standard flags
through :func:`cli_helpers.helper_options`, so every subcommand honours
``--verbose``, ``--debug``, ``--quiet``, ``--syslog``, ``--tags`` and the rest.

Contents
--------
* :func:`cli` - root group; prints the metadata banner without a subcommand.
* ``info`` / ``demo`` / ``ask`` / ``argv`` subcommands.
* :func:`main` - test-friendly entry point used by the console script.
"""

from __future__ import annotations

from typing import Sequence

import click

from . import __init__conf__
from .domain import PromptAborted
from .runtime import copy_argv, debug_var, helper_options, output, prompt, verbose

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@helper_options
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Root command; shows the metadata banner when no subcommand is given."""

    if ctx.invoked_subcommand is None:
        click.echo(__init__conf__.summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print resolved metadata so users can inspect installation details."""

    click.echo(__init__conf__.summary_info(), nl=False)


@cli.command("demo", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_demo() -> None:
    """Emit one message per output level; combine with -v, -vv or --debug."""

    output("Hello, World!", color="green")
    verbose("Shiny, happy people!", indent=1, color="yellow")
    verbose("a", 1, "b", 2, level=2, kv=True, color="red")
    debug_var({"c": 3, "d": 4}, caller_class="main")


@cli.command("ask", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_ask() -> None:
    """Ask for a number (default 1) and echo the selection."""

    value = prompt("Enter a number:", validate={"a number": str.isdigit}, default="1")
    output(f"You selected: {value}")


@cli.command(
    "argv",
    context_settings={**CLICK_CONTEXT_SETTINGS, "ignore_unknown_options": True, "allow_extra_args": True},
)
def cli_argv() -> None:
    """Show the command line as it was before the helper flags were parsed."""

    output("Arguments: " + ", ".join(f"'{arg}'" for arg in copy_argv()), color="cyan")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the click group in a test-friendly manner.

    Parameters
    ----------
    argv:
        Optional sequence of argument strings (defaults to ``sys.argv[1:]``).

    Returns
    -------
    int
        Zero on success, click's exit code on usage errors.
    """

    args = list(argv) if argv is not None else None
    try:
        cli.main(args=args, prog_name=__init__conf__.shell_command, standalone_mode=False)
    except click.ClickException as error:
        error.show()
        return error.exit_code
    except click.exceptions.Exit as exit_request:
        return exit_request.exit_code
    except (click.Abort, PromptAborted):
        click.echo("Aborted!", err=True)
        return 1
    return 0


__all__ = ["cli", "main"]
