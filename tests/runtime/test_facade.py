from __future__ import annotations

import sys

import pytest

import cli_helpers
from cli_helpers import config as helper_config
from cli_helpers.runtime import _state as runtime_state
from tests.fakes import RecordingConsole, ScriptedReader


def _init(argv: list[str], console: RecordingConsole, **kwargs):
    kwargs.setdefault("reader", ScriptedReader([]))
    return cli_helpers.init(
        argv,
        console=console,
        program="tool",
        color_probe=lambda: False,
        register_atexit=False,
        **kwargs,
    )


def test_init_installs_runtime_and_shutdown_removes_it(console: RecordingConsole) -> None:
    runtime = _init(["-v", "--no-color", "extra"], console)

    assert runtime_state.current_runtime() is runtime
    assert cli_helpers.setting("VERBOSE") == 1
    assert cli_helpers.setting("syslog_tag") == "tool"
    assert cli_helpers.copy_argv() == ["-v", "--no-color", "extra"]

    cli_helpers.shutdown()

    assert runtime_state.is_initialised() is False
    assert runtime.closed is True


def test_init_twice_is_an_error(console: RecordingConsole) -> None:
    _init([], console)

    with pytest.raises(RuntimeError, match="cannot be called twice"):
        _init([], console)


def test_output_functions_follow_flags(console: RecordingConsole) -> None:
    _init(["-v"], console)

    cli_helpers.output("Hello, World!", color="green")
    cli_helpers.verbose("Shiny, happy people!", indent=1, color="yellow")
    cli_helpers.verbose("a", 1, "b", 2, level=2, kv=True, color="red")

    assert console.stdout == ["Hello, World!", "  Shiny, happy people!"]


def test_unknown_option_names_raise_type_error(console: RecordingConsole) -> None:
    _init([], console)

    with pytest.raises(TypeError, match="colour"):
        cli_helpers.output("x", colour="red")


@pytest.mark.parametrize(
    ("entry_point", "options", "detail"),
    [
        ("output", {"syslog_level": "warn2"}, "Unknown syslog level"),
        ("output", {"indent": -1}, "indent must be zero or positive"),
        ("verbose", {"clear": -2}, "clear must be zero or positive"),
    ],
)
def test_invalid_option_values_are_reported_not_raised(
    console: RecordingConsole, entry_point: str, options: dict, detail: str
) -> None:
    _init(["-v"], console)

    result = getattr(cli_helpers, entry_point)("hello", **options)

    assert result == {"ok": False, "reason": "invalid_options", "sinks": ()}
    assert console.stdout == []
    assert len(console.stderr) == 1
    assert detail in console.stderr[0]


def test_debug_var_reports_invalid_option_values(console: RecordingConsole) -> None:
    _init(["--debug"], console)
    console.stderr.clear()

    result = cli_helpers.debug_var({"a": 1}, syslog_level="loud")

    assert result is not None and result["reason"] == "invalid_options"
    assert any("Unknown syslog level" in line for line in console.stderr)


def test_debug_uses_calling_module_as_class(console: RecordingConsole) -> None:
    _init(["--debug"], console)

    cli_helpers.debug("hidden: caller is not main")
    cli_helpers.debug("explicit main", caller_class="main")

    assert console.stdout == ["explicit main"]


def test_debug_class_matches_calling_module(console: RecordingConsole) -> None:
    _init(["--debug", "--debug-class", __name__], console)

    cli_helpers.debug("visible")
    cli_helpers.debug_var({"k": "v"})

    assert console.stdout[0] == "visible"
    assert '"k": "v"' in console.stdout[-1]


def test_override_escalates_verbosity(console: RecordingConsole) -> None:
    _init([], console)

    cli_helpers.verbose("before")
    cli_helpers.override("verbose", 1)
    cli_helpers.verbose("after")

    assert console.stdout == ["after"]


def test_colorize_follows_configuration(console: RecordingConsole) -> None:
    _init(["--color"], console)

    assert cli_helpers.colorize("red", "x") == "\x1b[31mx\x1b[0m"
    assert cli_helpers.strip_color(cli_helpers.colorize("red", "x")) == "x"


def test_prompts_use_the_runtime_reader(console: RecordingConsole) -> None:
    _init([], console, reader=ScriptedReader(["maybe", "no", "2", "", "secret"]))

    assert cli_helpers.confirm("Continue?") is False
    assert cli_helpers.menu("Pick", ["dog", "cat"]) == "dog"
    assert cli_helpers.text_input("Name", default="anon") == "anon"
    assert cli_helpers.pwprompt() == "secret"
    assert console.stderr == ["ERROR: must be one of 'y','n','yes','no'"]


def test_sticky_messages_replay_on_shutdown(console: RecordingConsole) -> None:
    _init([], console)

    cli_helpers.output("first", sticky=True)
    cli_helpers.output("second")
    cli_helpers.shutdown()

    assert console.stdout == ["first", "second", "first"]


def test_lazy_initialisation_uses_sys_argv(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr(sys, "argv", ["prog", "--no-color", "--quiet"])

    cli_helpers.output("suppressed")
    cli_helpers.output("shown", important=True)

    assert capsys.readouterr().out == "shown\n"
    assert cli_helpers.setting("quiet") is True
    assert cli_helpers.copy_argv() == ["--no-color", "--quiet"]
    cli_helpers.shutdown()


def test_dotenv_flag_loads_environment(monkeypatch: pytest.MonkeyPatch, console: RecordingConsole) -> None:
    calls: list[int] = []
    monkeypatch.setattr(helper_config, "enable_dotenv", lambda: calls.append(1))

    _init(["--use-dotenv"], console)
    cli_helpers.shutdown()
    _init([], console, environ={helper_config.DOTENV_ENV_VAR: "1"})
    cli_helpers.shutdown()
    _init(["--no-use-dotenv"], console, environ={helper_config.DOTENV_ENV_VAR: "1"})

    assert calls == [1, 1]
