"""Lifecycle states of the log pipeline."""

from __future__ import annotations

from enum import Enum


class PipelineState(Enum):
    """States a :class:`LogPipeline` moves through, strictly in this order.

    ``CREATED`` covers a constructed pipeline whose consumer thread has not
    been spawned yet.
    """

    CREATED = "created"
    RUNNING = "running"
    DRAINING = "draining"
    STOPPED = "stopped"

    @property
    def accepts_messages(self) -> bool:
        """Return ``True`` when ``log()`` may enqueue in this state."""

        return self is PipelineState.RUNNING


__all__ = ["PipelineState"]
