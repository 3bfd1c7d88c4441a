"""Shutdown orchestration for the output engine.

Purpose
-------
Provide the end-of-run report: discovered tags, sticky replay, paste
submission, and closing the syslog channel. The sequence runs once; calling
the returned callable again is a no-op.
"""

from __future__ import annotations

import logging
import shlex
from typing import Callable

from cli_helpers.application.ports import PastePort, SyslogPort
from cli_helpers.domain import CallOptions, PasteBuffer, StickyBuffer, TagCounter

from .emit import Emitter

logger = logging.getLogger(__name__)

NOPASTE_MISSING_SERVICE = "Cannot use nopaste without --nopaste-service or NOPASTE_SERVICES env var"


def create_shutdown(
    *,
    emitter: Emitter,
    tags: TagCounter,
    sticky: StickyBuffer,
    paste_buffer: PasteBuffer,
    paste: PastePort | None,
    syslog: SyslogPort | None,
) -> Callable[[], None]:
    """Return a callable performing the shutdown sequence exactly once."""

    done = False

    def shutdown() -> None:
        """Report tags, replay sticky messages, paste the transcript, close syslog."""
        nonlocal done
        if done:
            return
        done = True
        _report_tags(emitter, tags)
        for entry in sticky.drain():
            emitter.replay(entry)
        _submit_paste(emitter, paste_buffer, paste)
        if syslog is not None:
            try:
                syslog.close()
            except Exception:
                logger.warning("Closing syslog failed", exc_info=True)

    return shutdown


def _report_tags(emitter: Emitter, tags: TagCounter) -> None:
    if not tags:
        return
    summary = ", ".join(f"{tag}={count}" for tag, count in tags.sorted_items())
    emitter.output(CallOptions(color="cyan", stderr=True), [f"# Tags discovered: {summary}"])


def _submit_paste(emitter: Emitter, paste_buffer: PasteBuffer, paste: PastePort | None) -> None:
    configuration = emitter.configuration
    if not configuration.nopaste or not len(paste_buffer):
        return
    lines = paste_buffer.drain()
    if not configuration.nopaste_services:
        emitter.report_error(NOPASTE_MISSING_SERVICE)
        return
    if paste is None:
        return

    command = shlex.join(configuration.argv) if configuration.argv else configuration.syslog_tag
    text = "\n".join([f"$ {command}", *lines])
    try:
        url = paste.submit(
            text,
            summary=f"Output from {configuration.syslog_tag}",
            description=command,
            public=configuration.nopaste_public,
        )
    except Exception as exc:
        logger.warning("Paste submission failed", exc_info=True)
        emitter.report_error(f"Unable to submit the output to a paste service: {exc}")
        return
    emitter.output(CallOptions(color="magenta", stderr=True), [f"Posted to NoPaste: {url}"])


__all__ = ["NOPASTE_MISSING_SERVICE", "create_shutdown"]
