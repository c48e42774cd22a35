"""Click command group exposing the metadata banner and the sample run.

Contents
--------
* :func:`cli` - root group with ``--use-dotenv`` and ``--traceback`` toggles.
* :func:`cli_info` - print the metadata banner.
* :func:`cli_demo` - sort, serialize, and reload the sample flora through the
  runtime log pipeline.
* :func:`main` - entry point delegating to ``lib_cli_exit_tools.run_cli``.
"""

from __future__ import annotations

import asyncio
import dataclasses
import os
from pathlib import Path
from typing import Sequence

import click
import lib_cli_exit_tools

from . import __init__conf__
from . import config as biome_config
from . import runtime
from .adapters.serialization import create_serializer
from .application.use_cases.demo import run_demo
from .domain.formats import SerializationFormat
from .domain.organisms import ORGANISM_CODEC
from .errors import BiomeError

CLICK_CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


def summary_info() -> str:
    """Return the metadata banner printed by ``info``."""

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help=f"Load the nearest .env before running (default: follow {biome_config.DOTENV_ENV_VAR}).",
)
@click.option(
    "--traceback/--no-traceback",
    default=False,
    help="Show full Python traceback on errors.",
)
@click.pass_context
def cli(ctx: click.Context, use_dotenv: bool, traceback: bool) -> None:
    """Root command storing global flags and loading ``.env`` on request."""

    explicit: bool | None = None
    if ctx.get_parameter_source("use_dotenv") is not click.core.ParameterSource.DEFAULT:
        explicit = use_dotenv

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback

    if biome_config.should_use_dotenv(explicit=explicit, env_value=os.getenv(biome_config.DOTENV_ENV_VAR)):
        biome_config.enable_dotenv()

    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print resolved metadata so users can inspect installation details."""

    click.echo(summary_info(), nl=False)


@cli.command("demo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--format",
    "fmt",
    type=click.Choice([member.value for member in SerializationFormat], case_sensitive=False),
    default=SerializationFormat.XML.value,
    show_default=True,
    help="Snapshot encoding.",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Snapshot location (default: flora.<format> in the working directory).",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Append-only log file (default: $LOG_FILE or log.txt).",
)
def cli_demo(fmt: str, output: Path | None, log_file: Path | None) -> None:
    """Sort the sample flora, persist it, reload it, and log every step."""

    snapshot_format = SerializationFormat.from_name(fmt)
    location = output if output is not None else Path(f"flora{snapshot_format.suffix}")
    try:
        settings = runtime.build_pipeline_settings()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    if log_file is not None:
        settings = dataclasses.replace(settings, log_file=log_file)

    serializer = create_serializer(snapshot_format, ORGANISM_CODEC)
    pipeline = runtime.init(settings)
    try:
        restored = asyncio.run(run_demo(log=pipeline.log, serializer=serializer, location=location))
    except BiomeError as exc:
        raise click.ClickException(str(exc)) from exc
    finally:
        runtime.shutdown()
    click.echo(f"Restored {len(restored)} organisms from {location}")


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Run the CLI through ``lib_cli_exit_tools`` and return the exit code.

    Traceback preferences changed by ``--traceback`` are restored afterwards
    unless ``restore_traceback`` is ``False``.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main", "summary_info"]
