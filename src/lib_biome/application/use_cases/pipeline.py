"""Log pipeline: ordered, exactly-once delivery with an explicit lifecycle.

Purpose
-------
Decouple ``log()`` callers from sink I/O. Producers stamp and enqueue; one
consumer thread writes every message to the sinks and then broadcasts it to
the listeners.

Contents
--------
* :class:`LogPipeline` - ``start``/``log``/``subscribe``/``stop`` façade over a
  :class:`~lib_biome.adapters.queue.QueueAdapter`.

System Role
-----------
The sink handed to :func:`~lib_biome.application.use_cases.sort.sort_async`
and to application code. Construction never spawns a thread; :meth:`start`
does.

Alignment Notes
---------------
Closed-pipeline policy: ``log()`` raises
:class:`~lib_biome.errors.PipelineClosedError` from the moment :meth:`stop`
begins. Every message accepted before that point reaches all sinks before
:meth:`stop` returns.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from types import TracebackType

from lib_biome.application.ports import ClockPort, Listener, QueuePort, SinkPort
from lib_biome.domain.messages import LogMessage
from lib_biome.domain.state import PipelineState
from lib_biome.errors import InvalidStateError, PipelineClosedError, PipelineFullError

from ._fan_out import DiagnosticHook, create_fan_out

logger = logging.getLogger(__name__)

QueueFactory = Callable[[Callable[[LogMessage], None]], QueuePort]

# Seconds a sink or listener waits for the pipeline lock before giving up.
CONSUMER_LOCK_TIMEOUT = 0.5


class _UtcClock(ClockPort):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class LogPipeline:
    """Single-consumer log pipeline writing to console/file sinks.

    Parameters
    ----------
    sinks:
        Destinations written in order for every message.
    clock:
        Source of timestamps; defaults to UTC wall-clock time.
    queue_maxsize:
        Capacity of the queue; ``0`` keeps it unbounded.
    put_timeout:
        Seconds ``log()`` waits on a full bounded queue before raising
        :class:`PipelineFullError`. ``None`` waits indefinitely.
    stop_timeout:
        Default drain deadline for :meth:`stop`; ``None`` waits for the whole
        backlog.
    diagnostic:
        Optional hook receiving ``(name, payload)`` reports for sink, listener,
        and queue failures.
    queue_factory:
        Builds the queue around the fan-out worker; defaults to
        :class:`~lib_biome.adapters.queue.QueueAdapter`.

    Examples
    --------
    >>> lines = []
    >>> with LogPipeline([]) as pipeline:
    ...     _ = pipeline.subscribe(lines.append)
    ...     pipeline.log('hello')
    >>> pipeline.state
    <PipelineState.STOPPED: 'stopped'>
    >>> lines[0].endswith(']: hello')
    True
    """

    def __init__(
        self,
        sinks: Sequence[SinkPort],
        *,
        clock: ClockPort | None = None,
        queue_maxsize: int = 0,
        put_timeout: float | None = None,
        stop_timeout: float | None = None,
        diagnostic: DiagnosticHook = None,
        queue_factory: QueueFactory | None = None,
    ) -> None:
        self._sinks = tuple(sinks)
        self._clock = clock or _UtcClock()
        self._queue_maxsize = queue_maxsize
        self._put_timeout = put_timeout
        self._stop_timeout = stop_timeout
        self._diagnostic = diagnostic
        self._queue_factory = queue_factory
        self._queue: QueuePort | None = None
        self._listeners: tuple[Listener, ...] = ()
        self._state = PipelineState.CREATED
        self._stopping = False
        self._lock = threading.Lock()
        self._listeners_lock = threading.Lock()

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def sinks(self) -> tuple[SinkPort, ...]:
        return self._sinks

    def start(self) -> None:
        """Spawn the consumer thread; valid only once, from ``CREATED``."""

        with self._lock:
            if self._state is not PipelineState.CREATED:
                raise InvalidStateError(f"start() requires a new pipeline; state is {self._state.value}")
            fan_out = create_fan_out(sinks=self._sinks, listeners=lambda: self._listeners, diagnostic=self._diagnostic)
            self._queue = self._build_queue(fan_out)
            self._queue.start()
            self._state = PipelineState.RUNNING
        logger.debug("Log pipeline started with %d sink(s)", len(self._sinks))

    def log(self, message: str) -> None:
        """Stamp ``message`` with the current time and enqueue it.

        Never performs sink I/O on the caller's thread. Calls made from a sink
        or listener (the consumer thread) never block: they give up with
        :class:`PipelineFullError` when the queue has no room or a producer is
        stuck holding the lock on a full queue.

        Raises
        ------
        InvalidStateError
            When called before :meth:`start`.
        PipelineClosedError
            When :meth:`stop` has begun.
        PipelineFullError
            When a bounded queue stayed full past ``put_timeout``.
        """

        queue = self._queue
        from_consumer = queue is not None and queue.owns_current_thread()
        if from_consumer:
            if not self._lock.acquire(timeout=CONSUMER_LOCK_TIMEOUT):
                raise PipelineFullError("Log queue is full; message logged from the consumer thread was rejected")
        else:
            self._lock.acquire()
        try:
            if not self._state.accepts_messages:
                if self._state is PipelineState.CREATED:
                    raise InvalidStateError("log() called before start()")
                raise PipelineClosedError(f"Pipeline is {self._state.value}; message rejected")
            if self._queue is None:
                raise InvalidStateError("log() called on a pipeline without a queue")
            entry = LogMessage(text=message, created_at=self._clock.now())
            if not self._queue.put(entry, block=not from_consumer):
                raise PipelineFullError("Log queue is full; message rejected")
        finally:
            self._lock.release()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for every subsequent message.

        Listeners run on the consumer thread, after the sinks, in enqueue
        order. Returns a callable that removes the listener again.
        """

        # Listeners may (un)subscribe from the consumer thread; never take self._lock here.
        with self._listeners_lock:
            if self._state is PipelineState.STOPPED:
                raise InvalidStateError("subscribe() called on a stopped pipeline")
            self._listeners = (*self._listeners, listener)

        def unsubscribe() -> None:
            with self._listeners_lock:
                self._listeners = tuple(item for item in self._listeners if item is not listener)

        return unsubscribe

    def stop(self, *, timeout: float | None = None) -> None:
        """Reject new messages, drain the backlog, and join the consumer.

        A no-op on a stopped pipeline.

        Raises
        ------
        InvalidStateError
            When called before :meth:`start` or while another ``stop()`` is
            draining.
        DrainTimeoutError
            When the drain deadline elapsed; the pipeline stays ``DRAINING``
            and a later ``stop()`` resumes waiting for the backlog.
        """

        with self._lock:
            if self._state is PipelineState.STOPPED:
                return
            if self._state is PipelineState.CREATED:
                raise InvalidStateError("stop() called before start()")
            if self._stopping:
                raise InvalidStateError("stop() is already draining")
            queue = self._queue
            if queue is None:
                raise InvalidStateError("stop() called on a pipeline without a queue")
            self._state = PipelineState.DRAINING
            self._stopping = True

        try:
            queue.stop(timeout=timeout if timeout is not None else self._stop_timeout)
        finally:
            with self._lock:
                self._stopping = False
        with self._lock:
            self._state = PipelineState.STOPPED
        logger.debug("Log pipeline stopped")

    async def stop_async(self, *, timeout: float | None = None) -> None:
        """Await :meth:`stop` without blocking the running event loop."""

        await asyncio.to_thread(self.stop, timeout=timeout)

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        """Block until every accepted message was delivered."""

        if self._queue is None:
            return True
        return self._queue.wait_until_idle(timeout)

    def __call__(self, message: str) -> None:
        self.log(message)

    def __enter__(self) -> "LogPipeline":
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()

    def _build_queue(self, fan_out: Callable[[LogMessage], None]) -> QueuePort:
        if self._queue_factory is not None:
            return self._queue_factory(fan_out)
        from lib_biome.adapters.queue import QueueAdapter

        return QueueAdapter(
            worker=fan_out,
            maxsize=self._queue_maxsize,
            timeout=self._put_timeout,
            stop_timeout=self._stop_timeout,
            diagnostic=self._diagnostic,
        )


__all__ = ["LogPipeline"]
