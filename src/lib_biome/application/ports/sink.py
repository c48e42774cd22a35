"""Sink port describing destinations for rendered log messages.

Purpose
-------
Define the abstraction for adapters that write log messages (console, file)
so the fan-out use case depends on a narrow protocol.

Contents
--------
* :class:`SinkPort` - runtime-checkable protocol with a ``name`` and ``emit``.
* :data:`MessageSink` - the ``str -> None`` callable shape accepted by the
  sorter and satisfied by :meth:`LogPipeline.log`.
* :data:`Listener` - callback receiving each rendered line.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from lib_biome.domain.messages import LogMessage

MessageSink = Callable[[str], None]
Listener = Callable[[str], None]


@runtime_checkable
class SinkPort(Protocol):
    """Write one log message to a destination."""

    name: str

    def emit(self, message: LogMessage) -> None:
        """Write ``message``; raise on failure."""


__all__ = ["Listener", "MessageSink", "SinkPort"]
