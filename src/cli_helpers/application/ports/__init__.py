"""Protocols the application layer expects its adapters to satisfy."""

from __future__ import annotations

from .console import ConsolePort
from .data import DataSinkPort
from .encoder import EncoderPort
from .line_reader import LineReaderPort
from .paste import PastePort
from .syslog import SyslogPort

__all__ = [
    "ConsolePort",
    "DataSinkPort",
    "EncoderPort",
    "LineReaderPort",
    "PastePort",
    "SyslogPort",
]
