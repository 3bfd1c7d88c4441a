"""Paste adapter publishing the captured transcript.

Purpose
-------
Submit the ``--nopaste`` transcript to the first configured service that
accepts it and return the paste URL.

Contents
--------
* :data:`SERVICES` - supported service identifiers and their request builders.
* :class:`PasteAdapter` - concrete :class:`PastePort` implementation using ``requests``.

System Role
-----------
Invoked once by the shutdown use case. Failures of single services are
logged and the next service is tried; only when all fail is
:class:`~cli_helpers.domain.errors.PasteError` raised.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Callable

import requests

from cli_helpers.application.ports.paste import PastePort
from cli_helpers.domain.errors import PasteError

logger = logging.getLogger(__name__)

RequestBuilder = Callable[[str, str, bool], dict[str, Any]]


@dataclass(frozen=True)
class PasteService:
    """Endpoint plus the keyword arguments ``requests.post`` needs for it."""

    name: str
    url: str
    build: RequestBuilder


def _dpaste_request(text: str, summary: str, public: bool) -> dict[str, Any]:
    # dpaste has no private pastes; private ones simply expire sooner.
    return {"data": {"content": text, "title": summary, "expiry_days": 7 if public else 1}}


def _paste_rs_request(text: str, summary: str, public: bool) -> dict[str, Any]:
    return {"data": text.encode("utf-8"), "headers": {"Content-Type": "text/plain; charset=utf-8"}}


SERVICES: dict[str, PasteService] = {
    "dpaste": PasteService("dpaste", "https://dpaste.com/api/v2/", _dpaste_request),
    "paste.rs": PasteService("paste.rs", "https://paste.rs/", _paste_rs_request),
}


class PasteAdapter(PastePort):
    """Post text to the configured services in order until one succeeds."""

    def __init__(
        self,
        *,
        services: Sequence[str],
        session: requests.Session | None = None,
        timeout: float = 10.0,
    ) -> None:
        unknown = [name for name in services if name.strip().lower() not in SERVICES]
        if unknown:
            raise ValueError(f"Unknown paste service(s): {', '.join(unknown)}")
        self._services = [SERVICES[name.strip().lower()] for name in services]
        self._session = session or requests.Session()
        self._timeout = timeout

    def submit(self, text: str, *, summary: str, description: str, public: bool = False) -> str:
        errors: list[str] = []
        for service in self._services:
            try:
                response = self._session.post(service.url, timeout=self._timeout, **service.build(text, summary, public))
                response.raise_for_status()
            except requests.RequestException as exc:
                logger.info("Paste service %s failed: %s", service.name, exc)
                errors.append(f"{service.name}: {exc}")
                continue
            url = response.text.strip()
            logger.debug("Posted %s to %s as %s", description, service.name, url)
            return url
        raise PasteError("; ".join(errors) or "no paste service configured")


__all__ = ["PasteAdapter", "PasteService", "SERVICES"]
