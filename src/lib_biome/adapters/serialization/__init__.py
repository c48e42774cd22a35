"""Serializer adapters and the factory selecting one per format."""

from __future__ import annotations

from typing import TypeVar

from lib_biome.application.ports.serializer import RecordCodec, SerializerPort
from lib_biome.domain.formats import SerializationFormat

from .json_file import JsonSerializerAdapter
from .xml_file import XmlSerializerAdapter

R = TypeVar("R")


def create_serializer(fmt: SerializationFormat | str, codec: RecordCodec[R]) -> SerializerPort[list[R]]:
    """Return the serializer adapter for ``fmt``.

    Examples
    --------
    >>> from lib_biome.domain.organisms import ORGANISM_CODEC
    >>> type(create_serializer('xml', ORGANISM_CODEC)).__name__
    'XmlSerializerAdapter'
    >>> type(create_serializer(SerializationFormat.JSON, ORGANISM_CODEC)).__name__
    'JsonSerializerAdapter'
    """

    resolved = fmt if isinstance(fmt, SerializationFormat) else SerializationFormat.from_name(fmt)
    if resolved is SerializationFormat.XML:
        return XmlSerializerAdapter(codec)
    if resolved is SerializationFormat.JSON:
        return JsonSerializerAdapter(codec)
    raise ValueError(f"Unsupported serialization format: {resolved}")  # pragma: no cover - exhaustiveness guard


__all__ = ["JsonSerializerAdapter", "XmlSerializerAdapter", "create_serializer"]
