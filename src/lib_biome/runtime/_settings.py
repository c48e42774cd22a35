"""Pipeline settings resolved from arguments and ``LOG_*`` environment variables.

Environment variables take precedence over call arguments so operators can
reconfigure a packaged CLI without code changes.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

DiagnosticHook = Callable[[str, dict[str, Any]], None] | None

DEFAULT_LOG_FILE = Path("log.txt")


@dataclass(frozen=True, slots=True)
class PipelineSettings:
    """Resolved configuration consumed by :func:`build_pipeline`."""

    log_file: Path = DEFAULT_LOG_FILE
    queue_maxsize: int = 0
    put_timeout: float | None = None
    stop_timeout: float | None = None
    force_color: bool = False
    no_color: bool = False
    console_style: str = "cyan"


def build_pipeline_settings(
    *,
    log_file: str | Path = DEFAULT_LOG_FILE,
    queue_maxsize: int = 0,
    put_timeout: float | None = None,
    stop_timeout: float | None = None,
    force_color: bool = False,
    no_color: bool = False,
    console_style: str = "cyan",
) -> PipelineSettings:
    """Merge call arguments with environment overrides.

    Raises
    ------
    ValueError
        When a numeric variable cannot be parsed or is out of range.

    Examples
    --------
    >>> import os
    >>> _ = os.environ.pop('LOG_QUEUE_MAXSIZE', None)
    >>> build_pipeline_settings(queue_maxsize=8).queue_maxsize
    8
    """

    resolved_file = Path(os.getenv("LOG_FILE") or log_file)
    maxsize = _env_int("LOG_QUEUE_MAXSIZE", queue_maxsize)
    if maxsize < 0:
        raise ValueError("LOG_QUEUE_MAXSIZE must be zero or positive")
    return PipelineSettings(
        log_file=resolved_file,
        queue_maxsize=maxsize,
        put_timeout=_env_seconds("LOG_PUT_TIMEOUT", put_timeout),
        stop_timeout=_env_seconds("LOG_STOP_TIMEOUT", stop_timeout),
        force_color=_env_bool("LOG_FORCE_COLOR", force_color),
        no_color=_env_bool("LOG_NO_COLOR", no_color),
        console_style=os.getenv("LOG_CONSOLE_STYLE", console_style).strip(),
    )


def _env_bool(name: str, default: bool) -> bool:
    """Return the boolean value of an environment variable with fallback.

    Examples
    --------
    >>> import os
    >>> _ = os.environ.pop('LOG_EXAMPLE_BOOL', None)
    >>> _env_bool('LOG_EXAMPLE_BOOL', default=True)
    True
    >>> os.environ['LOG_EXAMPLE_BOOL'] = '0'
    >>> _env_bool('LOG_EXAMPLE_BOOL', default=True)
    False
    >>> _ = os.environ.pop('LOG_EXAMPLE_BOOL')
    """
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


def _env_seconds(name: str, default: float | None) -> float | None:
    """Parse a positive number of seconds; ``none``/empty keeps ``default``."""
    value = os.getenv(name)
    if value is None or value.strip().lower() in {"", "none"}:
        return default
    try:
        seconds = float(value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be a number of seconds, got {value!r}") from exc
    if seconds <= 0:
        raise ValueError(f"{name} must be positive")
    return seconds


__all__ = ["DEFAULT_LOG_FILE", "DiagnosticHook", "PipelineSettings", "build_pipeline_settings"]
