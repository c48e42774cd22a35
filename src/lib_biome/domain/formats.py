"""Serialization format enumeration.

Purpose
-------
Standardise the encodings accepted by the CLI, the runtime settings, and
:func:`lib_biome.adapters.serialization.create_serializer`.
"""

from __future__ import annotations

from enum import Enum


class SerializationFormat(Enum):
    """Encodings a snapshot can be written in.

    Examples
    --------
    >>> SerializationFormat.XML.value
    'xml'
    >>> SerializationFormat.from_name('  JSON ') is SerializationFormat.JSON
    True
    >>> SerializationFormat.from_name('yaml')
    Traceback (most recent call last):
    ...
    ValueError: Unsupported serialization format: 'yaml'
    """

    XML = "xml"
    JSON = "json"

    @property
    def suffix(self) -> str:
        """Return the conventional file suffix for this format."""

        return f".{self.value}"

    @classmethod
    def from_name(cls, name: str) -> "SerializationFormat":
        normalized = name.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(f"Unsupported serialization format: {name!r}")


__all__ = ["SerializationFormat"]
