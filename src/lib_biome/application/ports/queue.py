"""Port describing the queue infrastructure for fan-out processing."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_biome.domain.messages import LogMessage


@runtime_checkable
class QueuePort(Protocol):
    """Bridge between producers and the single consumer thread."""

    def start(self) -> None:
        """Start the consumer."""

    def stop(self, *, timeout: float | None = None) -> None:
        """Stop the consumer after draining queued messages."""

    def put(self, message: LogMessage, *, block: bool = True) -> bool:
        """Enqueue ``message``; return ``False`` when it was not accepted.

        ``block=False`` fails immediately on a full queue instead of waiting.
        """

    def owns_current_thread(self) -> bool:
        """Return ``True`` when called from the consumer thread."""

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        """Block until every accepted message was processed."""


__all__ = ["QueuePort"]
