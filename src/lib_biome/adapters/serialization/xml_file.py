"""Structured XML encoding of record snapshots.

Layout for the organism codec::

    <?xml version='1.0' encoding='utf-8'?>
    <ArrayOfOrganism version="1">
      <Organism><name>Oak</name><type>Tree</type><kind>flora</kind></Organism>
    </ArrayOfOrganism>
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path
from typing import Generic, TypeVar
from xml.etree import ElementTree

from lib_biome.application.ports.serializer import RecordCodec, SerializerPort
from lib_biome.errors import DecodeError

from ._io import build_record, read_payload, write_payload

R = TypeVar("R")

FORMAT_VERSION = "1"

# tostring(encoding="unicode") would declare the locale encoding; files are always UTF-8.
XML_DECLARATION = "<?xml version='1.0' encoding='utf-8'?>"

# Characters XML 1.0 cannot carry, escaped or not.
_XML_ILLEGAL = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


class XmlSerializerAdapter(SerializerPort[list[R]], Generic[R]):
    """Persist a list of records as an ``ArrayOf<Record>`` XML document."""

    def __init__(self, codec: RecordCodec[R], *, indent: bool = True) -> None:
        self._codec = codec
        self._indent = indent

    @property
    def root_tag(self) -> str:
        return f"ArrayOf{self._codec.record_name}"

    def serialize(self, value: Sequence[R], location: str | Path) -> None:
        root = ElementTree.Element(self.root_tag, {"version": FORMAT_VERSION})
        for index, record in enumerate(value):
            element = ElementTree.SubElement(root, self._codec.record_name)
            fields = self._codec.to_fields(record)
            for name in self._codec.fields:
                ElementTree.SubElement(element, name).text = _checked_text(fields[name], name, index)
        tree = ElementTree.ElementTree(root)
        if self._indent:
            ElementTree.indent(tree)
        content = ElementTree.tostring(root, encoding="unicode")
        write_payload(location, f"{XML_DECLARATION}\n{content}\n")

    def deserialize(self, location: str | Path) -> list[R]:
        raw = read_payload(location)
        try:
            root = ElementTree.fromstring(raw)
        except ElementTree.ParseError as exc:
            raise DecodeError(f"{location} is not well-formed XML: {exc}", location) from exc

        if root.tag != self.root_tag:
            raise DecodeError(f"{location} has root <{root.tag}>, expected <{self.root_tag}>", location)
        if root.get("version") != FORMAT_VERSION:
            raise DecodeError(f"{location} has unsupported version {root.get('version')!r}", location)

        records: list[R] = []
        for index, element in enumerate(root):
            if element.tag != self._codec.record_name:
                raise DecodeError(f"Unexpected element <{element.tag}> at position {index}", location)
            values = {child.tag: child.text or "" for child in element}
            records.append(build_record(self._codec, values, location, index))
        return records


def _checked_text(text: str, field: str, index: int) -> str:
    """Return ``text`` unless it holds a character XML cannot represent.

    Examples
    --------
    >>> _checked_text("Oak", "name", 0)
    'Oak'
    >>> _checked_text("Oak\\x01", "name", 2)
    Traceback (most recent call last):
    ...
    ValueError: Field 'name' of record #2 holds U+0001, which XML cannot represent
    """

    match = _XML_ILLEGAL.search(text)
    if match is not None:
        raise ValueError(f"Field {field!r} of record #{index} holds U+{ord(match.group()):04X}, which XML cannot represent")
    return text


__all__ = ["FORMAT_VERSION", "XmlSerializerAdapter"]
