"""Comparison sort offloaded to a worker thread, narrated through a sink.

Purpose
-------
Order a mutable sequence without blocking the event loop while reporting
progress to any ``str -> None`` sink (typically :meth:`LogPipeline.log`).

Contents
--------
* :func:`sort_async` - the offloaded sort.
* :func:`by_name` - ordinal comparator over ``name`` attributes.
"""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Callable, MutableSequence
from typing import Any, TypeVar

from lib_biome.application.ports.sink import MessageSink
from lib_biome.errors import SortFailedError

T = TypeVar("T")

Comparator = Callable[[T, T], int]

STARTED_MESSAGE = "Sorting started..."


def completed_message(count: int) -> str:
    return f"Sorting completed. Processed {count} items."


async def sort_async(sequence: MutableSequence[T], comparator: Comparator[T], sink: MessageSink) -> None:
    """Sort ``sequence`` in place on a worker thread.

    Emits exactly two messages to ``sink``: one before the sort is offloaded
    and one after it finished, carrying the element count. The sorted result
    is written back only after the worker returns, so callers never observe a
    partially sorted sequence. Not cancellable.

    Raises
    ------
    SortFailedError
        When ``comparator`` raises; the completion message is not emitted and
        ``sequence`` must not be relied upon.

    Examples
    --------
    >>> from types import SimpleNamespace as NS
    >>> items = [NS(name='Pine'), NS(name='Oak'), NS(name='Rose')]
    >>> messages = []
    >>> asyncio.run(sort_async(items, by_name, messages.append))
    >>> [item.name for item in items]
    ['Oak', 'Pine', 'Rose']
    >>> messages
    ['Sorting started...', 'Sorting completed. Processed 3 items.']
    """

    sink(STARTED_MESSAGE)
    snapshot = list(sequence)
    try:
        ordered = await asyncio.to_thread(sorted, snapshot, key=functools.cmp_to_key(comparator))
    except Exception as exc:
        raise SortFailedError(f"Comparator failed while sorting {len(snapshot)} items: {exc}") from exc
    # clear/extend rather than slice assignment: deque has no slice support.
    sequence.clear()
    sequence.extend(ordered)
    sink(completed_message(len(sequence)))


def by_name(left: Any, right: Any) -> int:
    """Compare two records by ``name`` using ordinal string ordering.

    Examples
    --------
    >>> from types import SimpleNamespace as NS
    >>> by_name(NS(name='Oak'), NS(name='Pine'))
    -1
    >>> by_name(NS(name='oak'), NS(name='Pine'))
    1
    """

    return (left.name > right.name) - (left.name < right.name)


__all__ = ["Comparator", "STARTED_MESSAGE", "by_name", "completed_message", "sort_async"]
