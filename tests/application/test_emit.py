from __future__ import annotations

import json

import pytest

from cli_helpers.domain import CallOptions, Configuration, SyslogSeverity, colorize
from tests.fakes import FakeSyslog, RecordingConsole


def test_output_scenario_green_hello_without_colour(make_runtime, console: RecordingConsole) -> None:
    runtime = make_runtime(Configuration(color=False))

    runtime.emitter.output(CallOptions(color="green"), ["Hello, World!"])

    assert console.stdout == ["Hello, World!"]


def test_output_without_messages_is_a_no_op(make_runtime, console: RecordingConsole) -> None:
    runtime = make_runtime()

    assert runtime.emitter.output(CallOptions(), []) is None
    assert console.stdout == []


def test_verbose_level_two_is_rejected_at_verbosity_one(make_runtime, console: RecordingConsole) -> None:
    runtime = make_runtime(Configuration(verbose=1, color=True))

    result = runtime.emitter.verbose(CallOptions(level=2, kv=True, color="red"), ["a", 1, "b", 2])

    assert result is None
    assert console.stdout == []


def test_verbose_level_two_renders_key_value_pairs(make_runtime, console: RecordingConsole) -> None:
    runtime = make_runtime(Configuration(verbose=2, color=True))

    runtime.emitter.verbose(CallOptions(level=2, kv=True, color="red"), ["a", 1, "b", 2])

    assert console.stdout == [f"a: {colorize('red', '1')}", f"b: {colorize('red', '2')}"]


def test_verbose_defaults_to_level_one_and_debug_unlocks_all_levels(make_runtime, console: RecordingConsole) -> None:
    runtime = make_runtime(Configuration(debug=True))

    runtime.emitter.verbose(CallOptions(), ["level one"])
    runtime.emitter.verbose(CallOptions(level=5), ["level five"])

    assert console.stdout == ["level one", "level five"]


@pytest.mark.parametrize(
    "options, expected",
    [
        (CallOptions(), SyslogSeverity.INFO),
        (CallOptions(level=2), SyslogSeverity.DEBUG),
        (CallOptions(level=2, syslog_level="notice"), SyslogSeverity.NOTICE),
    ],
)
def test_verbose_derives_syslog_level(make_runtime, options: CallOptions, expected: SyslogSeverity) -> None:
    syslog = FakeSyslog()
    runtime = make_runtime(Configuration(verbose=3, syslog=True), syslog=syslog)

    runtime.emitter.verbose(options, ["m"])

    assert syslog.messages == [(expected, "m")]


def test_debug_requires_debug_flag(make_runtime, console: RecordingConsole) -> None:
    runtime = make_runtime(Configuration(debug=False))

    assert runtime.emitter.debug(CallOptions(caller_class="main"), ["hidden"]) is None
    assert console.stdout == []


@pytest.mark.parametrize(
    "debug_class, caller, shown",
    [
        ("main", "main", True),
        ("main", None, True),
        ("main", "worker", False),
        ("WORKER", "worker", True),
        ("all", "worker", True),
    ],
)
def test_debug_filters_on_caller_class(
    make_runtime, console: RecordingConsole, debug_class: str, caller: str | None, shown: bool
) -> None:
    runtime = make_runtime(Configuration(debug=True, debug_class=debug_class))
    console.stdout.clear()

    runtime.emitter.debug(CallOptions(caller_class=caller), ["dbg"])

    assert (console.stdout == ["dbg"]) is shown


def test_debug_stays_out_of_syslog_unless_syslog_debug(make_runtime) -> None:
    quiet_syslog = FakeSyslog()
    loud_syslog = FakeSyslog()
    plain = make_runtime(Configuration(debug=True, syslog=True), syslog=quiet_syslog)
    loud = make_runtime(Configuration(debug=True, syslog=True, syslog_debug=True), syslog=loud_syslog)

    plain.emitter.debug(CallOptions(), ["dbg"])
    loud.emitter.debug(CallOptions(), ["dbg"])
    loud.emitter.debug(CallOptions(no_syslog=True), ["private"])

    assert quiet_syslog.messages == []
    assert loud_syslog.messages == [(SyslogSeverity.DEBUG, "dbg")]


def test_debug_var_dumps_json_after_blank_line(make_runtime, console: RecordingConsole) -> None:
    runtime = make_runtime(Configuration(debug=True))

    runtime.emitter.debug_var({"d": 4, "c": 3})

    assert console.stdout[0] == ""
    assert json.loads("\n".join(console.stdout[1:])) == {"c": 3, "d": 4}


def test_debug_var_yaml_and_overrides(make_runtime, console: RecordingConsole) -> None:
    syslog = FakeSyslog()
    runtime = make_runtime(Configuration(debug=True, syslog=True), syslog=syslog)

    runtime.emitter.debug_var({"c": 3}, yaml=True, clear=0, no_syslog=False)

    assert console.stdout == ["---\nc: 3"]
    assert syslog.messages == [(SyslogSeverity.DEBUG, "---\nc: 3")]


def test_debug_var_is_silent_without_debug(make_runtime, console: RecordingConsole) -> None:
    runtime = make_runtime()

    assert runtime.emitter.debug_var({"a": 1}) is None
    assert console.stdout == []


def test_override_changes_debug_and_verbose_only(make_runtime, console: RecordingConsole) -> None:
    runtime = make_runtime()

    runtime.emitter.override("VERBOSE", 2)
    runtime.emitter.override("quiet", True)
    runtime.emitter.verbose(CallOptions(level=2), ["now visible"])

    assert runtime.configuration.verbose == 2
    assert runtime.configuration.quiet is False
    assert console.stdout == ["now visible"]


def test_encoder_failure_is_reported_not_raised(make_runtime, console: RecordingConsole) -> None:
    class Unserialisable:
        def __str__(self) -> str:
            raise RuntimeError("cannot render")

    runtime = make_runtime()

    result = runtime.emitter.output(CallOptions(), [Unserialisable()])

    assert result == {"ok": False, "reason": "format_error", "sinks": ()}
    assert any("could not format output" in line for line in console.stderr)
