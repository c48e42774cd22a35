"""Composition root wiring settings to adapters and the pipeline."""

from __future__ import annotations

from rich.console import Console

from lib_biome.adapters import FileSinkAdapter, RichConsoleAdapter
from lib_biome.application.ports import ClockPort, SinkPort
from lib_biome.application.use_cases.pipeline import LogPipeline

from ._settings import DiagnosticHook, PipelineSettings


def build_sinks(settings: PipelineSettings, *, console: Console | None = None) -> list[SinkPort]:
    """Return the console sink followed by the file sink."""

    return [
        RichConsoleAdapter(
            console=console,
            force_color=settings.force_color,
            no_color=settings.no_color,
            style=settings.console_style,
        ),
        FileSinkAdapter(settings.log_file),
    ]


def build_pipeline(
    settings: PipelineSettings,
    *,
    diagnostic: DiagnosticHook = None,
    console: Console | None = None,
    clock: ClockPort | None = None,
) -> LogPipeline:
    """Assemble an unstarted :class:`LogPipeline` from ``settings``."""

    return LogPipeline(
        build_sinks(settings, console=console),
        clock=clock,
        queue_maxsize=settings.queue_maxsize,
        put_timeout=settings.put_timeout,
        stop_timeout=settings.stop_timeout,
        diagnostic=diagnostic,
    )


__all__ = ["build_pipeline", "build_sinks"]
