"""CLI behaviour coverage for the click command group."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner

from lib_biome import __init__conf__, runtime
from lib_biome import cli as cli_mod
from lib_biome.cli import summary_info
from lib_biome.errors import DecodeError

LOG_ENV_VARS = (
    "LOG_FILE",
    "LOG_QUEUE_MAXSIZE",
    "LOG_PUT_TIMEOUT",
    "LOG_STOP_TIMEOUT",
    "LOG_FORCE_COLOR",
    "LOG_NO_COLOR",
    "LOG_CONSOLE_STYLE",
    "LOG_USE_DOTENV",
)


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in an empty directory without ``LOG_*`` overrides."""

    for name in LOG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def run_cli(args: list[str] | None = None) -> tuple[int, str, BaseException | None]:
    """Invoke the click command with ``CliRunner`` and capture output."""

    runner = CliRunner()
    original_argv = sys.argv
    sys.argv = [__init__conf__.shell_command]
    try:
        result = runner.invoke(
            cli_mod.cli,
            args or [],
            prog_name=__init__conf__.shell_command,
        )
    finally:
        sys.argv = original_argv
    return result.exit_code, result.output, result.exception


def test_cli_without_subcommand_prints_summary() -> None:
    exit_code, stdout, _ = run_cli()

    assert exit_code == 0
    assert stdout == summary_info()
    assert stdout.startswith("Info for lib_biome:")


def test_cli_info_command_matches_summary() -> None:
    runner = CliRunner()
    result = runner.invoke(cli_mod.cli, ["info"])

    assert result.exit_code == 0
    assert result.output == summary_info()
    assert f"version       = {__init__conf__.version}" in result.output


def test_cli_version_option() -> None:
    exit_code, stdout, _ = run_cli(["--version"])

    assert exit_code == 0
    assert stdout.strip() == f"lib_biome version {__init__conf__.version}"


def test_cli_no_traceback_option(monkeypatch: pytest.MonkeyPatch) -> None:
    """`--no-traceback` should disable verbose tracebacks for subsequent commands."""

    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", True, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", True, raising=False)

    exit_code, _stdout, _exception = run_cli(["--no-traceback", "info"])

    assert exit_code == 0
    assert lib_cli_exit_tools.config.traceback is False
    assert lib_cli_exit_tools.config.traceback_force_color is False


@pytest.mark.usefixtures("clean_runtime")
@pytest.mark.parametrize("fmt", ["xml", "json"])
def test_cli_demo_writes_snapshot_and_log(workdir: Path, fmt: str) -> None:
    exit_code, stdout, exception = run_cli(["demo", "--format", fmt])

    assert exception is None, exception
    assert exit_code == 0
    snapshot = workdir / f"flora.{fmt}"
    assert snapshot.exists()
    assert f"Restored 3 organisms from flora.{fmt}" in stdout
    assert "]: Flora: Oak (Tree)" in stdout

    lines = (workdir / "log.txt").read_text(encoding="utf-8").splitlines()
    texts = [line.split("]: ", 1)[1] for line in lines]
    assert texts == [
        "Sorting started...",
        "Sorting completed. Processed 3 items.",
        f"Serialized to flora.{fmt}",
        "Territory: Meadow",
        "Flora: Oak (Tree)",
        "Flora: Pine (Tree)",
        "Flora: Rose (Flower)",
        "Oak grows in the sunlight.",
        "Pine grows in the sunlight.",
        "Rose grows in the sunlight.",
    ]
    assert all(line.startswith("[LOG ") for line in lines)
    assert runtime.is_initialised() is False


@pytest.mark.usefixtures("clean_runtime")
def test_cli_demo_honours_output_and_log_file(workdir: Path) -> None:
    output = workdir / "snapshots" / "plants.xml"
    log_file = workdir / "logs" / "run.log"

    exit_code, stdout, _ = run_cli(["demo", "--output", str(output), "--log-file", str(log_file)])

    assert exit_code == 0
    assert output.exists()
    assert f"Serialized to {output}" in log_file.read_text(encoding="utf-8")
    assert not (workdir / "log.txt").exists()


@pytest.mark.usefixtures("clean_runtime")
def test_cli_demo_appends_across_runs(workdir: Path) -> None:
    run_cli(["demo"])
    run_cli(["demo"])

    lines = (workdir / "log.txt").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 20


def test_cli_demo_rejects_invalid_environment(workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_QUEUE_MAXSIZE", "plenty")

    exit_code, stdout, _ = run_cli(["demo"])

    assert exit_code == 1
    assert "LOG_QUEUE_MAXSIZE must be an integer" in stdout
    assert runtime.is_initialised() is False


@pytest.mark.usefixtures("clean_runtime")
def test_cli_demo_reports_failures_and_shuts_down(workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    async def failing_demo(**kwargs: object) -> list[object]:
        raise DecodeError("snapshot is corrupt")

    monkeypatch.setattr(cli_mod, "run_demo", failing_demo)

    exit_code, stdout, _ = run_cli(["demo"])

    assert exit_code == 1
    assert "snapshot is corrupt" in stdout
    assert runtime.is_initialised() is False


def test_cli_demo_rejects_unknown_format(workdir: Path) -> None:
    exit_code, _stdout, _ = run_cli(["demo", "--format", "yaml"])

    assert exit_code == 2


def test_main_restores_traceback_preferences(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", False, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", False, raising=False)

    recorded: dict[str, bool] = {}

    def fake_run_cli(command: Callable[..., int], argv: list[str] | None = None, *, prog_name: str | None = None, **_: object) -> int:
        runner = CliRunner()
        result = runner.invoke(command, ["info"] if argv is None else argv)
        if result.exception is not None:
            raise result.exception
        recorded["traceback"] = lib_cli_exit_tools.config.traceback
        recorded["traceback_force_color"] = lib_cli_exit_tools.config.traceback_force_color
        return result.exit_code

    monkeypatch.setattr(lib_cli_exit_tools, "run_cli", fake_run_cli)

    exit_code = cli_mod.main(["--traceback", "info"])

    assert exit_code == 0
    assert recorded == {"traceback": True, "traceback_force_color": True}
    assert lib_cli_exit_tools.config.traceback is False
    assert lib_cli_exit_tools.config.traceback_force_color is False


def test_main_consumes_sys_argv(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", False, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", False, raising=False)
    monkeypatch.setattr(sys, "argv", [__init__conf__.shell_command, "info"], raising=False)

    exit_code = cli_mod.main()
    captured = capsys.readouterr()

    assert exit_code == 0
    assert "Info for lib_biome:" in captured.out
