"""Optional ``.env`` loading for the helper settings.

Purpose
-------
Let operators keep ``CLI_HELPERS_*`` and ``NOPASTE_SERVICES`` values in a
``.env`` file next to their scripts. Loading is opt-in through
``--use-dotenv`` or ``CLI_HELPERS_DOTENV=1``, and never overrides variables
that are already present in the environment.

Contents
--------
* :data:`DOTENV_ENV_VAR` - environment toggle.
* :func:`should_use_dotenv` - precedence between flag and environment.
* :func:`enable_dotenv` - locate and load the nearest ``.env`` file once.
"""

from __future__ import annotations

import logging
from pathlib import Path
from threading import Lock

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

DOTENV_ENV_VAR = "CLI_HELPERS_DOTENV"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_LOCK = Lock()
_LOADED_PATH: Path | None = None
_ATTEMPTED = False


def should_use_dotenv(explicit: bool | None, env_value: str | None) -> bool:
    """Return whether ``.env`` should be loaded.

    An explicit flag wins; otherwise the environment toggle decides.

    >>> should_use_dotenv(None, "1"), should_use_dotenv(False, "1"), should_use_dotenv(None, None)
    (True, False, False)
    """

    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUE_VALUES


def enable_dotenv(*, search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` file and return its path (``None`` if absent).

    The search walks upward from ``search_from`` (the working directory by
    default). Repeated calls return the first result without reading again.
    """

    global _LOADED_PATH, _ATTEMPTED
    with _LOCK:
        if _ATTEMPTED:
            return _LOADED_PATH
        _ATTEMPTED = True
        if search_from is None:
            candidate = find_dotenv(usecwd=True)
        else:
            candidate = _search_upwards(search_from)
        if not candidate:
            logger.debug("No .env file found")
            return None
        path = Path(candidate).resolve()
        load_dotenv(path, override=False)
        logger.debug("Loaded environment from %s", path)
        _LOADED_PATH = path
        return path


def _search_upwards(start: Path) -> str:
    for directory in (start.resolve(), *start.resolve().parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return str(candidate)
    return ""


def _reset_dotenv_state_for_testing() -> None:
    global _LOADED_PATH, _ATTEMPTED
    with _LOCK:
        _LOADED_PATH = None
        _ATTEMPTED = False


__all__ = ["DOTENV_ENV_VAR", "enable_dotenv", "should_use_dotenv"]
