"""Domain values and pure rules used by the output engine."""

from __future__ import annotations

from .buffers import PasteBuffer, StickyBuffer, StickyEntry, TagCounter
from .colors import colorize, strip_color
from .errors import CLIHelpersError, PasteError, PromptAborted, SinkUnavailableError
from .levels import SinkState, SyslogSeverity
from .messages import KV_PLACEHOLDER, format_lines, normalise_fragments
from .options import CallOptions
from .settings import DEBUG_CLASS_ALL, DEFAULT_KV_FORMAT, Configuration

__all__ = [
    "CLIHelpersError",
    "CallOptions",
    "Configuration",
    "DEBUG_CLASS_ALL",
    "DEFAULT_KV_FORMAT",
    "KV_PLACEHOLDER",
    "PasteBuffer",
    "PasteError",
    "PromptAborted",
    "SinkState",
    "SinkUnavailableError",
    "StickyBuffer",
    "StickyEntry",
    "SyslogSeverity",
    "TagCounter",
    "colorize",
    "format_lines",
    "normalise_fragments",
    "strip_color",
]
