"""Exception hierarchy shared by the pipeline, sorter, and serializers.

Purpose
-------
Give callers one base class (:class:`BiomeError`) to catch while keeping each
failure mode distinguishable.

Contents
--------
* Lifecycle errors raised by :class:`~lib_biome.application.use_cases.pipeline.LogPipeline`.
* :class:`SortFailedError` raised by :func:`~lib_biome.application.use_cases.sort.sort_async`.
* :class:`DecodeError` / :class:`NotFoundError` raised by serializer adapters.
* :class:`SinkWriteError` reported on the pipeline's diagnostic channel only.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lib_biome.domain.messages import LogMessage


class BiomeError(Exception):
    """Base exception for all lib_biome errors."""

    pass


class InvalidStateError(BiomeError):
    """Raised when a lifecycle method is called in the wrong pipeline state."""

    pass


class PipelineClosedError(BiomeError):
    """Raised by ``log()`` once ``stop()`` has begun draining."""

    pass


class PipelineFullError(BiomeError):
    """Raised when a bounded queue stayed full past the put timeout."""

    pass


class DrainTimeoutError(BiomeError):
    """Raised when the consumer did not finish draining before the deadline."""

    pass


class SortFailedError(BiomeError):
    """Raised when the comparator failed during an offloaded sort."""

    pass


class DecodeError(BiomeError):
    """Raised when stored content does not match the expected structure."""

    def __init__(self, message: str, location: str | Path | None = None):
        super().__init__(message)
        self.location = location


class NotFoundError(BiomeError):
    """Raised when a serialization location does not exist."""

    def __init__(self, location: str | Path):
        super().__init__(f"Serialization location not found: {location}")
        self.location = location


class SinkWriteError(BiomeError):
    """A sink failed to write one message.

    Never raised into producers; the fan-out wraps the original exception
    (available as ``__cause__``) and hands it to the diagnostic hook.
    """

    def __init__(self, sink_name: str, log_message: "LogMessage"):
        super().__init__(f"Sink {sink_name!r} failed to write message")
        self.sink_name = sink_name
        self.log_message = log_message


__all__ = [
    "BiomeError",
    "DecodeError",
    "DrainTimeoutError",
    "InvalidStateError",
    "NotFoundError",
    "PipelineClosedError",
    "PipelineFullError",
    "SinkWriteError",
    "SortFailedError",
]
