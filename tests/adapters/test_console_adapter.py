from __future__ import annotations

from io import StringIO

from rich.console import Console

from cli_helpers.adapters import RichConsoleAdapter
from cli_helpers.domain import colorize


def test_emit_writes_each_line_to_stdout(rich_adapter: RichConsoleAdapter, record_console: Console) -> None:
    rich_adapter.emit(["first", "second"])

    assert record_console.file.getvalue() == "first\nsecond\n"


def test_emit_to_stderr_with_blank_lines(rich_adapter: RichConsoleAdapter, record_console: Console) -> None:
    rich_adapter.emit(["oops"], stderr=True, clear=2)

    assert record_console.file.getvalue() == ""
    assert rich_adapter.stderr.file.getvalue() == "\n\noops\n"


def test_long_lines_are_not_wrapped(rich_adapter: RichConsoleAdapter, record_console: Console) -> None:
    line = "x" * 300

    rich_adapter.emit([line])

    assert record_console.file.getvalue() == line + "\n"


def test_colour_escapes_survive_on_colour_console(color_console: Console) -> None:
    adapter = RichConsoleAdapter(stdout=color_console)

    adapter.emit([colorize("red", "alert")])

    rendered = color_console.file.getvalue()
    assert "\x1b[31m" in rendered
    assert "alert" in rendered


def test_colour_escapes_are_dropped_without_colour(rich_adapter: RichConsoleAdapter, record_console: Console) -> None:
    rich_adapter.emit([colorize("red", "alert")])

    assert record_console.file.getvalue() == "alert\n"


def test_markup_like_text_is_printed_verbatim(rich_adapter: RichConsoleAdapter, record_console: Console) -> None:
    rich_adapter.emit(["[bold]not markup[/bold] :smile:"])

    assert record_console.file.getvalue() == "[bold]not markup[/bold] :smile:\n"


def test_erase_previous_line_only_on_terminals(rich_adapter: RichConsoleAdapter, color_console: Console) -> None:
    rich_adapter.erase_previous_line()
    terminal = RichConsoleAdapter(stdout=color_console, stderr=Console(file=StringIO()))
    terminal.erase_previous_line()

    assert rich_adapter.stdout.file.getvalue() == ""
    assert "\x1b[1A" in color_console.file.getvalue()
    assert "\x1b[2K" in color_console.file.getvalue()


def test_tabs_and_trailing_blanks_are_written_unchanged(
    rich_adapter: RichConsoleAdapter, record_console: Console
) -> None:
    rich_adapter.emit(["a\tb", "x  "])

    assert record_console.file.getvalue() == "a\tb\nx  \n"


def test_colour_console_writes_escapes_and_tabs_verbatim(color_console: Console) -> None:
    adapter = RichConsoleAdapter(stdout=color_console)
    line = colorize("green", "Hello,\tWorld!")

    adapter.emit([line], clear=1)

    assert color_console.file.getvalue() == "\n" + line + "\n"
