"""Runtime state container and access helpers."""

from __future__ import annotations

from threading import RLock

from lib_biome.application.use_cases.pipeline import LogPipeline


_STATE: LogPipeline | None = None
_STATE_LOCK = RLock()


def set_runtime(pipeline: LogPipeline) -> None:
    """Install ``pipeline`` as the active singleton."""

    with _STATE_LOCK:
        global _STATE
        _STATE = pipeline


def clear_runtime() -> None:
    """Remove the active pipeline if present."""

    with _STATE_LOCK:
        global _STATE
        _STATE = None


def current_runtime() -> LogPipeline:
    """Return the active pipeline or raise when uninitialised."""

    with _STATE_LOCK:
        if _STATE is None:
            raise RuntimeError("lib_biome.runtime.init() must be called before logging")
        return _STATE


def is_initialised() -> bool:
    """Return ``True`` when :func:`lib_biome.runtime.init` has been called."""

    with _STATE_LOCK:
        return _STATE is not None


__all__ = ["clear_runtime", "current_runtime", "is_initialised", "set_runtime"]
