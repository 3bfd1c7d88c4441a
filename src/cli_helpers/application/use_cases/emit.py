"""Leveled entry points gating, formatting and routing messages.

Purpose
-------
Implement ``output``, ``verbose``, ``debug`` and ``debug_var`` on top of the
formatter and the router, plus the ``override`` escape hatch that changes the
debug/verbose settings at runtime.

Contents
--------
* :class:`Emitter` - holds the live configuration and the router.

System Role
-----------
Called by the façade functions in :mod:`cli_helpers.runtime` and by the
prompt and shutdown use cases. Formatting or encoding failures are reported
on the console and never raised to the calling script.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from cli_helpers.application.ports import EncoderPort
from cli_helpers.domain import (
    CallOptions,
    Configuration,
    StickyEntry,
    SyslogSeverity,
    colorize,
    format_lines,
    normalise_fragments,
)

from .route_output import OutputRouter, RouteResult

logger = logging.getLogger(__name__)


class Emitter:
    """Level filters bound to one configuration and one router.

    Parameters
    ----------
    configuration:
        Resolved settings; replaced wholesale by :meth:`override`.
    route:
        Router produced by :func:`create_route_output`.
    encoders:
        Mapping with ``"json"`` and ``"yaml"`` encoders for structured values.
    """

    def __init__(
        self,
        *,
        configuration: Configuration,
        route: OutputRouter,
        encoders: Mapping[str, EncoderPort],
    ) -> None:
        self._configuration = configuration
        self._route = route
        self._encoders = dict(encoders)

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    def output(self, options: CallOptions, messages: Sequence[Any]) -> RouteResult | None:
        """Format ``messages`` and hand them to the router.

        Returns ``None`` when there is nothing to output.
        """

        if not messages:
            return None
        configuration = self._configuration
        encoder = self._encoder_for(options, configuration)
        try:
            fragments = normalise_fragments(messages, encoder.encode)
        except Exception as exc:
            return self._formatting_failed(exc, configuration)
        return self._format_and_route(fragments, options, configuration)

    def replay(self, entry: StickyEntry) -> RouteResult | None:
        """Route a sticky entry again; its fragments are already normalised."""

        if not entry.messages:
            return None
        return self._format_and_route(list(entry.messages), entry.options, self._configuration)

    def verbose(self, options: CallOptions, messages: Sequence[Any]) -> RouteResult | None:
        """Output only when ``-v`` was given at least ``options.level`` times (default 1)."""

        level = options.level if options.level is not None else 1
        severity = options.syslog_level
        if severity is None:
            severity = SyslogSeverity.DEBUG if level > 1 else SyslogSeverity.INFO
        options = options.merged(level=level, syslog_level=severity)

        configuration = self._configuration
        if not configuration.debug and configuration.verbose < level:
            return None
        return self.output(options, messages)

    def debug(self, options: CallOptions, messages: Sequence[Any]) -> RouteResult | None:
        """Output only with ``--debug`` and a matching ``--debug-class``."""

        configuration = self._configuration
        if not configuration.debug:
            return None
        if not configuration.debug_class_allows(options.caller_class):
            return None
        options = options.merged(syslog_level=SyslogSeverity.DEBUG)
        options = options.with_defaults(no_syslog=not configuration.syslog_debug)
        return self.output(options, messages)

    def debug_var(self, value: Any, *, caller_class: str | None = None, **overrides: Any) -> RouteResult | None:
        """Dump ``value`` as a debug message.

        The dump is preceded by a blank line and kept out of syslog unless the
        caller overrides ``clear`` or ``no_syslog``.
        """

        baseline = CallOptions(clear=1, no_syslog=True, caller_class=caller_class)
        configuration = self._configuration
        try:
            options = CallOptions.from_kwargs({**_as_kwargs(baseline), **overrides})
        except ValueError as exc:
            return self._formatting_failed(exc, configuration, reason="invalid_options")
        if not configuration.debug:
            return None
        encoder = self._encoder_for(options, configuration)
        try:
            dumped = encoder.encode(value)
        except Exception as exc:
            return self._formatting_failed(exc, configuration)
        return self.debug(options, [dumped])

    def override(self, name: str, value: Any) -> Configuration:
        """Change ``debug`` or ``verbose`` at runtime; other names are ignored."""

        self._configuration = self._configuration.with_override(name, value)
        return self._configuration

    def report_error(self, message: str) -> RouteResult | None:
        """Show ``message`` as a red line on stderr through the normal route."""

        return self.output(CallOptions(color="red", stderr=True), [message])

    def reject_options(self, exc: ValueError) -> RouteResult:
        """Report option values that could not be turned into :class:`CallOptions`."""

        return self._formatting_failed(exc, self._configuration, reason="invalid_options")

    def _encoder_for(self, options: CallOptions, configuration: Configuration) -> EncoderPort:
        name = "yaml" if options.yaml or configuration.encoding == "yaml" else "json"
        return self._encoders[name]

    def _format_and_route(
        self,
        fragments: list[str | None],
        options: CallOptions,
        configuration: Configuration,
    ) -> RouteResult:
        try:
            lines = format_lines(
                fragments,
                options,
                color_enabled=configuration.color,
                kv_format=configuration.kv_format,
            )
        except Exception as exc:
            return self._formatting_failed(exc, configuration)
        return self._route(lines, fragments, options, configuration)

    def _formatting_failed(
        self,
        exc: Exception,
        configuration: Configuration,
        *,
        reason: str = "format_error",
    ) -> RouteResult:
        logger.warning("Unable to format output", exc_info=True)
        try:
            self._route.console.emit(
                [colorize("red", f"cli_helpers could not format output: {exc}", enabled=configuration.color)],
                stderr=True,
            )
        except Exception:
            logger.error("Unable to report formatting failure", exc_info=True)
        return {"ok": False, "reason": reason, "sinks": ()}


def _as_kwargs(options: CallOptions) -> dict[str, Any]:
    return {name: getattr(options, name) for name in options.__dataclass_fields__}


__all__ = ["Emitter"]
