"""Serializer port defining snapshot persistence contracts.

Purpose
-------
Describe how a typed value is written to, and read back from, a named storage
location so callers can swap encodings without touching the orchestration.

Contents
--------
* :class:`SerializerPort` - ``serialize``/``deserialize`` protocol.
* :class:`RecordCodec` - flat field mapping a serializer uses to encode each
  record of a snapshot.

Alignment Notes
---------------
Adapters live in :mod:`lib_biome.adapters.serialization`; they raise
:class:`~lib_biome.errors.NotFoundError` and
:class:`~lib_biome.errors.DecodeError` rather than leaking ``OSError`` or
parser exceptions.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, TypeVar, runtime_checkable

T = TypeVar("T")
R = TypeVar("R")


@runtime_checkable
class SerializerPort(Protocol[T]):
    """Encode a value to a location and decode it back.

    Examples
    --------
    >>> class Memory:
    ...     def __init__(self):
    ...         self.store = {}
    ...     def serialize(self, value, location):
    ...         self.store[str(location)] = list(value)
    ...     def deserialize(self, location):
    ...         return list(self.store[str(location)])
    >>> isinstance(Memory(), SerializerPort)
    True
    """

    def serialize(self, value: T, location: str | Path) -> None:
        """Overwrite ``location`` with a self-describing encoding of ``value``."""

    def deserialize(self, location: str | Path) -> T:
        """Reconstruct the value stored at ``location``."""


@runtime_checkable
class RecordCodec(Protocol[R]):
    """Field-by-field mapping between a record type and string values."""

    record_name: str
    fields: tuple[str, ...]

    def to_fields(self, record: R) -> dict[str, str]: ...

    def from_fields(self, values: Mapping[str, str]) -> R: ...


__all__ = ["RecordCodec", "SerializerPort"]
