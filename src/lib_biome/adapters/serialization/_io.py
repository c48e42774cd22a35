"""File helpers shared by the serializer adapters."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, TypeVar

from lib_biome.application.ports.serializer import RecordCodec
from lib_biome.errors import DecodeError, NotFoundError

R = TypeVar("R")


def write_payload(location: str | Path, content: str) -> None:
    """Overwrite ``location`` with ``content``; not atomic."""

    path = Path(location)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def read_payload(location: str | Path) -> str:
    """Return the text stored at ``location``.

    Raises
    ------
    NotFoundError
        When ``location`` does not exist.
    DecodeError
        When the content is not valid UTF-8.
    """

    path = Path(location)
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise NotFoundError(location) from exc
    except UnicodeDecodeError as exc:
        raise DecodeError(f"{location} is not valid UTF-8 text", location) from exc


def build_record(codec: RecordCodec[R], values: Mapping[str, Any], location: str | Path, index: int) -> R:
    """Validate ``values`` against ``codec.fields`` and build the record."""

    missing = [name for name in codec.fields if name not in values]
    if missing:
        raise DecodeError(f"{codec.record_name} #{index} is missing field(s): {', '.join(missing)}", location)
    not_text = [name for name in codec.fields if not isinstance(values[name], str)]
    if not_text:
        raise DecodeError(f"{codec.record_name} #{index} has non-text field(s): {', '.join(not_text)}", location)
    try:
        return codec.from_fields({name: values[name] for name in codec.fields})
    except (KeyError, ValueError) as exc:
        raise DecodeError(f"{codec.record_name} #{index} was rejected: {exc}", location) from exc


__all__ = ["build_record", "read_payload", "write_payload"]
