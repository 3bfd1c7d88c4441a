"""Resolved, process-wide configuration consumed by the output engine.

Purpose
-------
Hold every setting the router and the level filters need after command-line
flags, environment variables and probes have been resolved. Instances are
immutable; the only sanctioned runtime change (:meth:`Configuration.with_override`)
returns a fresh copy.

Contents
--------
* :class:`Configuration` dataclass.
* :data:`DEFAULT_KV_FORMAT` and :data:`DEBUG_CLASS_ALL` constants.

System Role
-----------
Created once by :func:`cli_helpers.runtime.build_configuration` and shared by
every use case through the :class:`~cli_helpers.runtime.HelperRuntime`.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from typing import Any

DEFAULT_KV_FORMAT = ": "
DEBUG_CLASS_ALL = "all"

_OVERRIDABLE = frozenset({"debug", "verbose"})


@dataclass(slots=True, frozen=True)
class Configuration:
    """Immutable snapshot of the resolved helper settings.

    Attributes
    ----------
    debug / debug_class:
        Developer output switch and the caller class allowed through
        (``"all"`` matches every class).
    verbose:
        Number of verbosity escalations requested (``-v`` count).
    color / quiet:
        Console presentation switches.
    syslog, syslog_facility, syslog_tag, syslog_debug:
        Syslog mirroring settings; ``syslog_debug`` lets debug output through.
    tags:
        ``None`` disables tag filtering, otherwise only these tags pass.
    data_file:
        Destination for ``data=True`` lines; ``None`` when not requested.
    nopaste, nopaste_public, nopaste_services:
        Paste capture settings applied at shutdown.
    kv_format:
        Separator joining keys and values in key/value mode.
    encoding:
        ``"json"`` or ``"yaml"``; how structured values are serialised.
    argv:
        Copy of the command line before any flag parsing.
    """

    debug: bool = False
    debug_class: str = "main"
    verbose: int = 0
    color: bool = False
    quiet: bool = False
    syslog: bool = False
    syslog_facility: str = "local0"
    syslog_tag: str = "cli-helpers"
    syslog_debug: bool = False
    tags: frozenset[str] | None = None
    data_file: Path | None = None
    nopaste: bool = False
    nopaste_public: bool = False
    nopaste_services: tuple[str, ...] = ()
    kv_format: str = DEFAULT_KV_FORMAT
    encoding: str = "json"
    argv: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.verbose < 0:
            raise ValueError("verbose must be zero or positive")
        if self.encoding not in ("json", "yaml"):
            raise ValueError(f"Unsupported encoding: {self.encoding!r}")

    def debug_class_allows(self, caller_class: str | None) -> bool:
        """Return ``True`` when debug output declared by ``caller_class`` may pass."""

        wanted = self.debug_class.lower()
        if wanted == DEBUG_CLASS_ALL:
            return True
        return (caller_class or "main").lower() == wanted

    def tag_allows(self, tag: str) -> bool:
        return self.tags is None or tag in self.tags

    def with_override(self, name: str, value: Any) -> Configuration:
        """Return a copy with ``debug`` or ``verbose`` replaced.

        Any other ``name`` is ignored and ``self`` is returned unchanged.

        Examples
        --------
        >>> Configuration().with_override("VERBOSE", 2).verbose
        2
        >>> Configuration().with_override("quiet", True).quiet
        False
        """

        key = name.strip().lower()
        if key not in _OVERRIDABLE:
            return self
        if key == "verbose":
            return replace(self, verbose=max(int(value or 0), 0))
        return replace(self, debug=bool(value))

    def lookup(self, name: str) -> Any:
        """Return the setting called ``name`` (case-insensitive) or ``None``."""

        key = name.strip().lower().replace("-", "_")
        if key not in self.__dataclass_fields__:
            return None
        return getattr(self, key)

    def to_dict(self) -> dict[str, Any]:
        """Serialise the configuration for ``debug_var`` style dumps."""

        data = asdict(self)
        data["tags"] = sorted(self.tags) if self.tags is not None else None
        data["data_file"] = str(self.data_file) if self.data_file is not None else None
        data["nopaste_services"] = list(self.nopaste_services)
        data["argv"] = list(self.argv)
        return data


__all__ = ["DEBUG_CLASS_ALL", "DEFAULT_KV_FORMAT", "Configuration"]
