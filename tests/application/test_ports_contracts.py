from __future__ import annotations

import pytest

from cli_helpers.adapters import (
    DataFileAdapter,
    JsonEncoder,
    RichConsoleAdapter,
    SyslogAdapter,
    TerminalLineReader,
    YamlEncoder,
)
from cli_helpers.adapters.paste import PasteAdapter
from cli_helpers.application.ports import (
    ConsolePort,
    DataSinkPort,
    EncoderPort,
    LineReaderPort,
    PastePort,
    SyslogPort,
)
from tests.fakes import FakePaste, FakeSyslog, RecordingConsole, ScriptedReader


@pytest.mark.parametrize(
    "port, implementation",
    [
        (ConsolePort, RichConsoleAdapter()),
        (ConsolePort, RecordingConsole()),
        (SyslogPort, SyslogAdapter(tag="t", sender=lambda *_: None, opener=lambda *_: None, closer=lambda: None)),
        (SyslogPort, FakeSyslog()),
        (EncoderPort, JsonEncoder()),
        (EncoderPort, YamlEncoder()),
        (LineReaderPort, TerminalLineReader()),
        (LineReaderPort, ScriptedReader([])),
        (PastePort, PasteAdapter(services=["dpaste"])),
        (PastePort, FakePaste()),
    ],
)
def test_implementations_satisfy_ports(port: type, implementation: object) -> None:
    assert isinstance(implementation, port)


def test_data_file_adapter_satisfies_data_sink_port(tmp_path) -> None:
    assert isinstance(DataFileAdapter(path=tmp_path / "data.txt"), DataSinkPort)
