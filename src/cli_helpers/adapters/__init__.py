"""Concrete adapters implementing the application ports."""

from __future__ import annotations

from .console.rich_console import RichConsoleAdapter
from .data_file import DataFileAdapter
from .encoders import JsonEncoder, YamlEncoder
from .structured.syslog import SyslogAdapter
from .terminal_input import TerminalLineReader

__all__ = [
    "DataFileAdapter",
    "JsonEncoder",
    "RichConsoleAdapter",
    "SyslogAdapter",
    "TerminalLineReader",
    "YamlEncoder",
]
