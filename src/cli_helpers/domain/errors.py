"""Exceptions raised by cli_helpers collaborators."""

from __future__ import annotations


class CLIHelpersError(Exception):
    """Base class for errors originating in cli_helpers."""


class SinkUnavailableError(CLIHelpersError):
    """A sink could not be opened during initialisation."""


class PasteError(CLIHelpersError):
    """Every configured paste service rejected the transcript."""


class PromptAborted(CLIHelpersError):
    """Raised by line readers when the user interrupts a prompt."""


__all__ = ["CLIHelpersError", "PasteError", "PromptAborted", "SinkUnavailableError"]
