"""Thread-based queue adapter draining log messages into the fan-out.

Purpose
-------
Decouple producers calling ``log()`` from the slow act of writing to sinks.

Contents
--------
* :class:`QueueAdapter` - single consumer thread implementation of :class:`QueuePort`.

System Role
-----------
Owns the FIFO queue and the consumer thread. Producers only ``put``; the
consumer is the only caller of the worker, so sinks never see concurrent
writes.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from collections.abc import Callable
from typing import Any

from lib_biome.application.ports.queue import QueuePort
from lib_biome.domain.messages import LogMessage
from lib_biome.errors import DrainTimeoutError


LOGGER = logging.getLogger(__name__)


class QueueAdapter(QueuePort):
    """Process log messages on a background thread in enqueue order.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> processed = []
    >>> adapter = QueueAdapter(worker=lambda message: processed.append(message.text))
    >>> adapter.start()
    >>> adapter.put(LogMessage('hello', datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)))
    True
    >>> adapter.stop()
    >>> processed
    ['hello']
    """

    def __init__(
        self,
        *,
        worker: Callable[[LogMessage], None],
        maxsize: int = 0,
        timeout: float | None = None,
        stop_timeout: float | None = None,
        diagnostic: Callable[[str, dict[str, Any]], None] | None = None,
    ) -> None:
        """Create the queue with its worker and capacity.

        Parameters
        ----------
        worker:
            Callable invoked for each message on the consumer thread.
        maxsize:
            Maximum number of queued messages; ``0`` leaves the queue unbounded.
        timeout:
            Seconds a producer waits for space on a full bounded queue before
            :meth:`put` gives up. ``None`` waits indefinitely.
        stop_timeout:
            Default drain deadline applied when :meth:`stop` is called without
            an explicit ``timeout``. ``None`` waits for the full backlog.
        diagnostic:
            Optional hook receiving ``(name, payload)`` for worker failures and
            shutdown timeouts.
        """
        if maxsize < 0:
            raise ValueError("maxsize must be zero or positive")
        self._worker = worker
        self._queue: queue.Queue[LogMessage | None] = queue.Queue(maxsize=maxsize)
        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()
        self._drain_event = threading.Event()
        self._drain_event.set()
        self._timeout = timeout
        self._stop_timeout = stop_timeout
        self._diagnostic = diagnostic
        self._worker_failures = 0

    def start(self) -> None:
        """Start the consumer thread if it is not already running."""
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="lib_biome-log-consumer", daemon=True)
        self._thread.start()

    def stop(self, *, timeout: float | None = None) -> None:
        """Drain every queued message, then stop the consumer thread.

        Parameters
        ----------
        timeout:
            Per-call override for the drain deadline. ``None`` falls back to
            the ``stop_timeout`` given at construction.

        Raises
        ------
        DrainTimeoutError
            When the consumer is still running once the deadline elapsed.
        """
        thread = self._thread
        if thread is None:
            return

        effective_timeout = timeout if timeout is not None else self._stop_timeout
        deadline = time.monotonic() + effective_timeout if effective_timeout is not None else None

        self._stop_event.set()
        self._queue.put(None)

        if deadline is None:
            thread.join()
        else:
            thread.join(max(0.0, deadline - time.monotonic()))

        if thread.is_alive():
            self._emit_diagnostic(
                "queue_shutdown_timeout",
                {"timeout": effective_timeout, "pending": self._queue.qsize()},
            )
            raise DrainTimeoutError("Queue consumer failed to drain within the allotted timeout")

        self._thread = None
        self._stop_event.clear()
        self._drain_event.set()

    def put(self, message: LogMessage, *, block: bool = True) -> bool:
        """Enqueue ``message`` for asynchronous processing.

        Returns ``True`` when the message was accepted, ``False`` when a bounded
        queue stayed full for longer than the configured timeout. With
        ``block=False`` a full queue is reported without waiting."""
        try:
            if block:
                self._queue.put(message, timeout=self._timeout)
            else:
                self._queue.put_nowait(message)
        except queue.Full:
            return False
        self._drain_event.clear()
        return True

    def owns_current_thread(self) -> bool:
        """Return ``True`` when called from the consumer thread (a sink or listener)."""

        return self._thread is not None and self._thread is threading.current_thread()

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        """Block until all queued messages are processed or ``timeout`` elapses.

        Returns ``True`` when the queue drained fully; ``False`` when the wait
        timed out.
        """

        if self._queue.unfinished_tasks == 0:
            return True
        return self._drain_event.wait(timeout)

    @property
    def running(self) -> bool:
        """Return ``True`` while the consumer thread is alive."""

        return self._thread is not None and self._thread.is_alive()

    @property
    def worker_failures(self) -> int:
        """Return how many messages made the worker raise."""

        return self._worker_failures

    def _run(self) -> None:
        """Internal consumer loop draining the queue until stopped."""
        while True:
            item = self._queue.get()
            try:
                if item is None:
                    if self._stop_event.is_set() and self._queue.empty():
                        break
                    continue
                try:
                    self._worker(item)
                except Exception as exc:  # noqa: BLE001
                    self._worker_failures += 1
                    self._report_worker_exception(item, exc)
            finally:
                self._queue.task_done()
                if self._queue.unfinished_tasks == 0:
                    self._drain_event.set()

            if self._stop_event.is_set() and self._queue.empty():
                break

    def _report_worker_exception(self, message: LogMessage, exc: Exception) -> None:
        """Log and surface worker failures without tearing down the thread."""

        LOGGER.error("Queue worker raised an exception; continuing", exc_info=exc)
        self._emit_diagnostic("queue_worker_error", {"message": message.text, "exception": repr(exc)})

    def _emit_diagnostic(self, name: str, payload: dict[str, Any]) -> None:
        """Invoke the diagnostic hook while guarding against callback failures."""

        if self._diagnostic is None:
            return
        try:
            self._diagnostic(name, payload)
        except Exception as diagnostic_exc:  # noqa: BLE001
            LOGGER.error("Queue diagnostic hook raised while reporting %s", name, exc_info=diagnostic_exc)


__all__ = ["QueueAdapter"]
