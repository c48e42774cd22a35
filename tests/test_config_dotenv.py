from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

import pytest
from click.testing import CliRunner

from lib_biome import cli as cli_module
from lib_biome import config as biome_config


@pytest.fixture(autouse=True)
def _reset_dotenv_state() -> Iterator[None]:
    """Reset shared dotenv state around each test."""

    biome_config._reset_dotenv_state_for_testing()
    yield
    biome_config._reset_dotenv_state_for_testing()


def test_enable_dotenv_populates_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Loading the nearest .env injects values found in parent directories."""

    nested = tmp_path / "nested"
    nested.mkdir()
    env_file = tmp_path / ".env"
    env_file.write_text("LOG_FILE=dotenv.log\n")
    monkeypatch.chdir(nested)
    monkeypatch.delenv("LOG_FILE", raising=False)

    loaded = biome_config.enable_dotenv()

    assert loaded == env_file.resolve()
    assert os.environ["LOG_FILE"] == "dotenv.log"

    os.environ.pop("LOG_FILE", None)


def test_enable_dotenv_respects_existing_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Existing environment variables keep precedence over .env entries."""

    nested = tmp_path / "nested"
    nested.mkdir()
    (tmp_path / ".env").write_text("LOG_FILE=dotenv.log\n")
    monkeypatch.chdir(nested)
    monkeypatch.setenv("LOG_FILE", "real.log")

    result = biome_config.enable_dotenv()

    assert result is not None
    assert os.environ["LOG_FILE"] == "real.log"


def test_enable_dotenv_with_explicit_start(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """An explicit search root is walked upwards like the working directory."""

    deep = tmp_path / "a" / "b"
    deep.mkdir(parents=True)
    env_file = tmp_path / "a" / ".env"
    env_file.write_text("LOG_CONSOLE_STYLE=green\n")
    monkeypatch.delenv("LOG_CONSOLE_STYLE", raising=False)

    assert biome_config.enable_dotenv(search_from=deep) == env_file.resolve()
    assert biome_config.enable_dotenv(search_from=tmp_path) == env_file.resolve()
    assert os.environ["LOG_CONSOLE_STYLE"] == "green"

    os.environ.pop("LOG_CONSOLE_STYLE", None)


def test_cli_dotenv_toggle_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    """CLI flag wins over environment toggle when deciding whether to load .env."""

    runner = CliRunner()

    calls: list[tuple[tuple[object, ...], dict[str, object]]] = []

    def record_enable(*args: object, **kwargs: object) -> None:
        calls.append((args, kwargs))

    monkeypatch.setattr(biome_config, "enable_dotenv", record_enable)
    monkeypatch.delenv(biome_config.DOTENV_ENV_VAR, raising=False)

    result = runner.invoke(cli_module.cli, ["--use-dotenv", "info"])
    assert result.exit_code == 0
    assert len(calls) == 1

    calls.clear()
    result = runner.invoke(cli_module.cli, ["info"], env={biome_config.DOTENV_ENV_VAR: "1"})
    assert result.exit_code == 0
    assert len(calls) == 1

    calls.clear()
    result = runner.invoke(cli_module.cli, ["--no-use-dotenv", "info"], env={biome_config.DOTENV_ENV_VAR: "1"})
    assert result.exit_code == 0
    assert calls == []

    calls.clear()
    result = runner.invoke(cli_module.cli, ["info"])
    assert result.exit_code == 0
    assert calls == []


@pytest.mark.parametrize(
    "explicit, env_value, expected",
    [
        (None, None, False),
        (None, "yes", True),
        (None, " ON ", True),
        (None, "0", False),
        (True, "0", True),
        (False, "1", False),
    ],
)
def test_should_use_dotenv_table(explicit: bool | None, env_value: str | None, expected: bool) -> None:
    assert biome_config.should_use_dotenv(explicit=explicit, env_value=env_value) is expected
