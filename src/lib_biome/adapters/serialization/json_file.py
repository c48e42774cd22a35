"""Compact JSON encoding of record snapshots.

The document names the record schema and version so a file written for one
record type is rejected when read back as another::

    {"schema":"Organism","version":1,"items":[{"name":"Oak","type":"Tree","kind":"flora"}]}
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Generic, TypeVar

from lib_biome.application.ports.serializer import RecordCodec, SerializerPort
from lib_biome.errors import DecodeError

from ._io import build_record, read_payload, write_payload

R = TypeVar("R")

FORMAT_VERSION = 1


class JsonSerializerAdapter(SerializerPort[list[R]], Generic[R]):
    """Persist a list of records as one compact JSON document."""

    def __init__(self, codec: RecordCodec[R]) -> None:
        self._codec = codec

    def serialize(self, value: Sequence[R], location: str | Path) -> None:
        document = {
            "schema": self._codec.record_name,
            "version": FORMAT_VERSION,
            "items": [self._codec.to_fields(record) for record in value],
        }
        write_payload(location, json.dumps(document, ensure_ascii=False, separators=(",", ":")))

    def deserialize(self, location: str | Path) -> list[R]:
        raw = read_payload(location)
        try:
            document = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise DecodeError(f"{location} is not valid JSON: {exc.msg}", location) from exc

        if not isinstance(document, dict):
            raise DecodeError(f"{location} does not hold a JSON object", location)
        schema = document.get("schema")
        if schema != self._codec.record_name:
            raise DecodeError(f"{location} holds schema {schema!r}, expected {self._codec.record_name!r}", location)
        if document.get("version") != FORMAT_VERSION:
            raise DecodeError(f"{location} has unsupported version {document.get('version')!r}", location)
        items = document.get("items")
        if not isinstance(items, list):
            raise DecodeError(f"{location} has no 'items' list", location)

        records: list[R] = []
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                raise DecodeError(f"{self._codec.record_name} #{index} is not a JSON object", location)
            records.append(build_record(self._codec, item, location, index))
        return records


__all__ = ["FORMAT_VERSION", "JsonSerializerAdapter"]
