from __future__ import annotations

import os
from pathlib import Path

import pytest
from click.testing import CliRunner

from cli_helpers import cli as cli_module
from cli_helpers import config as helper_config


def test_enable_dotenv_populates_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Loading the nearest .env injects values into the environment."""

    nested = tmp_path / "nested"
    nested.mkdir()
    env_file = tmp_path / ".env"
    env_file.write_text("CLI_HELPERS_VERBOSE=2\n")
    monkeypatch.chdir(nested)
    monkeypatch.delenv("CLI_HELPERS_VERBOSE", raising=False)

    loaded = helper_config.enable_dotenv()

    assert loaded == env_file.resolve()
    assert os.environ["CLI_HELPERS_VERBOSE"] == "2"

    os.environ.pop("CLI_HELPERS_VERBOSE", None)


def test_enable_dotenv_respects_existing_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Existing environment variables keep precedence over .env entries."""

    nested = tmp_path / "nested"
    nested.mkdir()
    (tmp_path / ".env").write_text("CLI_HELPERS_VERBOSE=2\n")
    monkeypatch.chdir(nested)
    monkeypatch.setenv("CLI_HELPERS_VERBOSE", "1")

    result = helper_config.enable_dotenv()

    assert result is not None
    assert os.environ["CLI_HELPERS_VERBOSE"] == "1"


def test_enable_dotenv_with_explicit_start_and_missing_file(tmp_path: Path) -> None:
    assert helper_config.enable_dotenv(search_from=tmp_path) is None


def test_enable_dotenv_only_loads_once(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("CLI_HELPERS_QUIET=0\n")

    first = helper_config.enable_dotenv(search_from=tmp_path)
    second = helper_config.enable_dotenv(search_from=tmp_path / "elsewhere")

    assert first == second == (tmp_path / ".env").resolve()
    os.environ.pop("CLI_HELPERS_QUIET", None)


def test_cli_dotenv_toggle_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    """CLI flag wins over environment toggle when deciding whether to load .env."""

    runner = CliRunner()

    calls: list[tuple[tuple[object, ...], dict[str, object]]] = []

    def record_enable(*args: object, **kwargs: object) -> None:
        calls.append((args, kwargs))

    monkeypatch.setattr(helper_config, "enable_dotenv", record_enable)

    result = runner.invoke(cli_module.cli, ["--no-color", "--use-dotenv", "info"])
    assert result.exit_code == 0
    assert len(calls) == 1

    calls.clear()
    env = {helper_config.DOTENV_ENV_VAR: "1"}
    result = runner.invoke(cli_module.cli, ["--no-color", "info"], env=env)
    assert result.exit_code == 0
    assert len(calls) == 1

    calls.clear()
    result = runner.invoke(cli_module.cli, ["--no-color", "--no-use-dotenv", "info"], env=env)
    assert result.exit_code == 0
    assert calls == []
