"""Runtime façade owning the process-wide log pipeline.

Purpose
-------
Expose a stable entry point (``init``, ``log``, ``get_pipeline``,
``shutdown``) so the CLI and host code do not wire adapters themselves.

Contents
--------
* ``init`` - composition root building and starting the pipeline.
* ``log`` / ``get_pipeline`` - accessors for the active pipeline.
* ``shutdown`` / ``shutdown_async`` - drain and clear the singleton.

System Role
-----------
Outer shell around :class:`~lib_biome.application.use_cases.pipeline.LogPipeline`;
configuration comes from :func:`build_pipeline_settings` (``LOG_*`` variables).
"""

from __future__ import annotations

from rich.console import Console

from lib_biome.application.use_cases.pipeline import LogPipeline

from ._composition import build_pipeline, build_sinks
from ._settings import DiagnosticHook, PipelineSettings, build_pipeline_settings
from ._state import clear_runtime, current_runtime, is_initialised, set_runtime


def init(
    settings: PipelineSettings | None = None,
    *,
    diagnostic: DiagnosticHook = None,
    console: Console | None = None,
) -> LogPipeline:
    """Compose, start, and register the process-wide pipeline.

    Parameters
    ----------
    settings:
        Resolved configuration; ``None`` reads ``LOG_*`` environment variables
        on top of the defaults.
    diagnostic:
        Hook receiving sink/listener/queue failure reports.
    console:
        Optional Rich console for the console sink (tests record output).

    Raises
    ------
    RuntimeError
        If a pipeline is already initialised; call :func:`shutdown` first.
    """

    if is_initialised():
        raise RuntimeError("lib_biome.runtime.init() cannot be called twice without shutdown()")
    resolved = settings if settings is not None else build_pipeline_settings()
    pipeline = build_pipeline(resolved, diagnostic=diagnostic, console=console)
    pipeline.start()
    set_runtime(pipeline)
    return pipeline


def get_pipeline() -> LogPipeline:
    """Return the active pipeline; raises :class:`RuntimeError` before :func:`init`."""

    return current_runtime()


def log(message: str) -> None:
    """Log ``message`` through the active pipeline."""

    current_runtime().log(message)


def shutdown() -> None:
    """Drain the active pipeline and clear the runtime singleton."""

    pipeline = current_runtime()
    try:
        pipeline.stop()
    finally:
        clear_runtime()


async def shutdown_async() -> None:
    """Asynchronous variant of :func:`shutdown` for event-loop hosts."""

    pipeline = current_runtime()
    try:
        await pipeline.stop_async()
    finally:
        clear_runtime()


__all__ = [
    "PipelineSettings",
    "build_pipeline",
    "build_pipeline_settings",
    "build_sinks",
    "get_pipeline",
    "init",
    "is_initialised",
    "log",
    "shutdown",
    "shutdown_async",
]
