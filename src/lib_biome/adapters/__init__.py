"""Concrete adapters implementing the application ports."""

from __future__ import annotations

from .console.rich_console import RichConsoleAdapter
from .file_sink import FileSinkAdapter
from .queue import QueueAdapter
from .serialization import JsonSerializerAdapter, XmlSerializerAdapter, create_serializer

__all__ = [
    "FileSinkAdapter",
    "JsonSerializerAdapter",
    "QueueAdapter",
    "RichConsoleAdapter",
    "XmlSerializerAdapter",
    "create_serializer",
]
