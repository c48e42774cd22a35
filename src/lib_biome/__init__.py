"""Flora/fauna sample built around a queued, ordered log pipeline.

The public surface re-exports the pipeline, the async sorter, the serializer
adapters, the domain records, and the error taxonomy so
``import lib_biome`` is enough for host code.
"""

from __future__ import annotations

from .adapters import FileSinkAdapter, JsonSerializerAdapter, RichConsoleAdapter, XmlSerializerAdapter, create_serializer
from .application.use_cases import LogPipeline, by_name, run_demo, sort_async
from .domain import (
    ORGANISM_CODEC,
    LogMessage,
    Organism,
    OrganismKind,
    PipelineState,
    SerializationFormat,
    Territory,
    fauna,
    flora,
)
from .errors import (
    BiomeError,
    DecodeError,
    DrainTimeoutError,
    InvalidStateError,
    NotFoundError,
    PipelineClosedError,
    PipelineFullError,
    SinkWriteError,
    SortFailedError,
)

__all__ = [
    "BiomeError",
    "DecodeError",
    "DrainTimeoutError",
    "FileSinkAdapter",
    "InvalidStateError",
    "JsonSerializerAdapter",
    "LogMessage",
    "LogPipeline",
    "NotFoundError",
    "ORGANISM_CODEC",
    "Organism",
    "OrganismKind",
    "PipelineClosedError",
    "PipelineFullError",
    "PipelineState",
    "RichConsoleAdapter",
    "SerializationFormat",
    "SinkWriteError",
    "SortFailedError",
    "Territory",
    "XmlSerializerAdapter",
    "by_name",
    "create_serializer",
    "fauna",
    "flora",
    "run_demo",
    "sort_async",
]
