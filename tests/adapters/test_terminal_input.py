from __future__ import annotations

import click
import click.termui
import pytest
from click.testing import CliRunner

from cli_helpers.adapters import TerminalLineReader
from cli_helpers.domain import PromptAborted


def _ask(secret: bool = False) -> None:
    reader = TerminalLineReader()
    answer = reader.read_secret("Password: ") if secret else reader.read_line("Name: ")
    click.echo(f"<{answer}>")


@click.command()
@click.option("--secret", is_flag=True)
def ask_command(secret: bool) -> None:
    _ask(secret)


def test_read_line_returns_the_typed_answer() -> None:
    result = CliRunner().invoke(ask_command, [], input="answer\n")

    assert result.exit_code == 0
    assert "Name: " in result.output
    assert result.output.endswith("<answer>\n")


def test_empty_line_reads_as_empty_answer() -> None:
    result = CliRunner().invoke(ask_command, [], input="\n")

    assert result.output.endswith("<>\n")


def test_read_secret_hides_the_answer() -> None:
    result = CliRunner().invoke(ask_command, ["--secret"], input="hunter2\n")

    assert result.exit_code == 0
    assert result.output.endswith("<hunter2>\n")
    assert "hunter2\n<" not in result.output


def test_interrupt_raises_prompt_aborted(monkeypatch: pytest.MonkeyPatch) -> None:
    def interrupted(*args: object, **kwargs: object) -> str:
        raise click.Abort()

    monkeypatch.setattr(click, "prompt", interrupted)

    with pytest.raises(PromptAborted):
        TerminalLineReader().read_secret("Password: ")


def test_end_of_input_raises_prompt_aborted(monkeypatch: pytest.MonkeyPatch) -> None:
    def closed(prompt: str) -> str:
        raise EOFError

    monkeypatch.setattr(click.termui, "visible_prompt_func", closed)

    with pytest.raises(PromptAborted):
        TerminalLineReader().read_line("Name: ")
