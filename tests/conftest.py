from __future__ import annotations

from collections.abc import Callable, Iterator
from io import StringIO
from typing import Any

import pytest
from rich.console import Console

from cli_helpers import config as helper_config
from cli_helpers.adapters import RichConsoleAdapter
from cli_helpers.domain import Configuration
from cli_helpers.runtime import HelperRuntime, build_runtime
from cli_helpers.runtime import _state as runtime_state
from cli_helpers.runtime._settings import ENV_COLOR, ENV_DEBUG, ENV_NOPASTE_SERVICES, ENV_QUIET, ENV_VERBOSE
from tests.fakes import FakeSyslog, RecordingConsole, ScriptedReader


@pytest.fixture(autouse=True)
def _isolate_global_state(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in (ENV_COLOR, ENV_DEBUG, ENV_QUIET, ENV_VERBOSE, ENV_NOPASTE_SERVICES, helper_config.DOTENV_ENV_VAR):
        monkeypatch.delenv(name, raising=False)
    runtime_state.clear_runtime()
    helper_config._reset_dotenv_state_for_testing()
    yield
    runtime_state.clear_runtime()
    helper_config._reset_dotenv_state_for_testing()


@pytest.fixture
def console() -> RecordingConsole:
    return RecordingConsole()


@pytest.fixture
def fake_syslog() -> FakeSyslog:
    return FakeSyslog()


@pytest.fixture
def record_console() -> Console:
    """Return a Rich console writing plain text into a buffer."""

    return Console(file=StringIO(), no_color=True, soft_wrap=True, width=120)


@pytest.fixture
def color_console() -> Console:
    return Console(file=StringIO(), force_terminal=True, color_system="standard", soft_wrap=True, width=120)


@pytest.fixture
def make_runtime(console: RecordingConsole) -> Callable[..., HelperRuntime]:
    """Build an independent runtime around the recording console."""

    def factory(configuration: Configuration | None = None, **kwargs: Any) -> HelperRuntime:
        kwargs.setdefault("console", console)
        kwargs.setdefault("reader", ScriptedReader([]))
        return build_runtime(configuration or Configuration(), **kwargs)

    return factory


@pytest.fixture
def rich_adapter(record_console: Console) -> RichConsoleAdapter:
    err = Console(file=StringIO(), no_color=True, soft_wrap=True, width=120)
    return RichConsoleAdapter(stdout=record_console, stderr=err)
