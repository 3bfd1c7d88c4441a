from __future__ import annotations

import pytest

from cli_helpers.domain.levels import SinkState, SyslogSeverity


@pytest.mark.parametrize(
    "name, expected",
    [
        ("debug", SyslogSeverity.DEBUG),
        ("INFO", SyslogSeverity.INFO),
        ("Notice", SyslogSeverity.NOTICE),
        ("err", SyslogSeverity.ERR),
        ("error", SyslogSeverity.ERR),
        ("warn", SyslogSeverity.WARNING),
        ("critical", SyslogSeverity.CRIT),
        ("panic", SyslogSeverity.EMERG),
    ],
)
def test_from_name_accepts_keywords_and_aliases(name: str, expected: SyslogSeverity) -> None:
    assert SyslogSeverity.from_name(name) is expected


def test_from_name_passes_members_through() -> None:
    assert SyslogSeverity.from_name(SyslogSeverity.ALERT) is SyslogSeverity.ALERT


def test_from_name_rejects_unknown_level() -> None:
    with pytest.raises(ValueError, match="Unknown syslog level"):
        SyslogSeverity.from_name("loud")


def test_priority_matches_syslog_numbering() -> None:
    assert [severity.priority for severity in SyslogSeverity] == list(range(8))
    assert SyslogSeverity.ERR.keyword == "err"


def test_sink_state_has_two_members() -> None:
    assert {state.value for state in SinkState} == {"enabled", "disabled"}
