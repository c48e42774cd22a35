"""Immutable log message travelling through the pipeline.

Purpose
-------
Capture the caller's text together with the moment ``log()`` was called so the
consumer can render identical lines for every sink.

Contents
--------
* :class:`LogMessage` dataclass with :meth:`LogMessage.render`.
* Utility function ``_ensure_aware`` for timestamp validation.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


@dataclass(slots=True, frozen=True)
class LogMessage:
    """Text plus creation timestamp, immutable once constructed.

    Examples
    --------
    >>> msg = LogMessage('Sorting started...', datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc))
    >>> msg.render()
    '[LOG 2025-09-30 12:00:00+00:00]: Sorting started...'
    """

    text: str
    created_at: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "created_at", _ensure_aware(self.created_at))

    @property
    def timestamp(self) -> str:
        """Return the creation time formatted for sink output."""

        return self.created_at.isoformat(sep=" ", timespec="seconds")

    def render(self) -> str:
        """Return the line written by every sink."""

        return f"[LOG {self.timestamp}]: {self.text}"


__all__ = ["LogMessage"]
