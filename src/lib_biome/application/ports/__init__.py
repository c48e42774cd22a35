"""Protocols the use cases depend on; adapters implement them."""

from __future__ import annotations

from .queue import QueuePort
from .serializer import RecordCodec, SerializerPort
from .sink import Listener, MessageSink, SinkPort
from .time import ClockPort

__all__ = [
    "ClockPort",
    "Listener",
    "MessageSink",
    "QueuePort",
    "RecordCodec",
    "SerializerPort",
    "SinkPort",
]
