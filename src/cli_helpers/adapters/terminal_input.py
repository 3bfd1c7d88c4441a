"""Line reader backed by the controlling terminal.

Reads go through :func:`click.prompt`, so line editing, hidden password input
and ``CliRunner`` input redirection behave as they do for any click command.
End of input and Ctrl-C both raise :class:`PromptAborted`.
"""

from __future__ import annotations

import click

from cli_helpers.application.ports.line_reader import LineReaderPort
from cli_helpers.domain.errors import PromptAborted


class TerminalLineReader(LineReaderPort):
    """Read answers from standard input."""

    def read_line(self, prompt: str) -> str:
        return self._read(prompt, hide_input=False)

    def read_secret(self, prompt: str) -> str:
        return self._read(prompt, hide_input=True)

    @staticmethod
    def _read(prompt: str, *, hide_input: bool) -> str:
        try:
            return click.prompt(
                prompt,
                default="",
                show_default=False,
                prompt_suffix="",
                hide_input=hide_input,
                type=str,
            )
        except click.Abort as exc:
            raise PromptAborted("prompt interrupted") from exc


__all__ = ["TerminalLineReader"]
