"""Domain entities and value objects used by the pipeline and the samples."""

from __future__ import annotations

from .formats import SerializationFormat
from .messages import LogMessage
from .organisms import ORGANISM_CODEC, Organism, OrganismCodec, OrganismKind, Territory, fauna, flora
from .state import PipelineState

__all__ = [
    "LogMessage",
    "ORGANISM_CODEC",
    "Organism",
    "OrganismCodec",
    "OrganismKind",
    "PipelineState",
    "SerializationFormat",
    "Territory",
    "fauna",
    "flora",
]
