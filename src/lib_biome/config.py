"""Opt-in ``.env`` loading for the CLI and host applications.

``.env`` files are never read implicitly. The CLI loads the nearest one when
``--use-dotenv`` is passed or ``LOG_USE_DOTENV`` is truthy; the flag wins over
the variable. Variables already present in the environment keep precedence
over values from the file.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import find_dotenv, load_dotenv

DOTENV_ENV_VAR = "LOG_USE_DOTENV"

_TRUTHY = {"1", "true", "yes", "on"}

_LOADED_PATH: Path | None = None


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether ``.env`` loading is requested.

    Examples
    --------
    >>> should_use_dotenv(explicit=None, env_value='yes')
    True
    >>> should_use_dotenv(explicit=False, env_value='1')
    False
    >>> should_use_dotenv()
    False
    """

    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def enable_dotenv(*, search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` walking up from ``search_from`` (default: cwd).

    Returns the resolved path that was loaded, or ``None`` when no file was
    found. Repeated calls return the first loaded path without re-reading.
    """

    global _LOADED_PATH
    if _LOADED_PATH is not None:
        return _LOADED_PATH

    if search_from is None:
        candidate = find_dotenv(usecwd=True)
    else:
        candidate = _find_upwards(search_from)
    if not candidate:
        return None
    path = Path(candidate).resolve()
    load_dotenv(path, override=False)
    _LOADED_PATH = path
    return path


def _find_upwards(start: Path) -> str:
    for directory in (start.resolve(), *start.resolve().parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return str(candidate)
    return ""


def _reset_dotenv_state_for_testing() -> None:
    """Forget which ``.env`` was loaded so tests start from a clean slate."""

    global _LOADED_PATH
    _LOADED_PATH = None


__all__ = ["DOTENV_ENV_VAR", "enable_dotenv", "should_use_dotenv"]
