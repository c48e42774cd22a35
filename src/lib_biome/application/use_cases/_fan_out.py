"""Per-message fan-out executed on the consumer thread.

Writes each message to every sink in order, then broadcasts the rendered line
to the listeners. A failing sink or listener is reported and skipped; the
remaining destinations still receive the message.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from lib_biome.application.ports.sink import Listener, SinkPort
from lib_biome.domain.messages import LogMessage
from lib_biome.errors import SinkWriteError

logger = logging.getLogger(__name__)

DiagnosticHook = Callable[[str, dict[str, Any]], None] | None


def _sink_name(sink: SinkPort) -> str:
    return getattr(sink, "name", None) or type(sink).__name__


def build_diagnostic_emitter(diagnostic: DiagnosticHook) -> Callable[[str, dict[str, Any]], None]:
    """Return a callable that forwards to ``diagnostic`` and never raises."""

    def emit(name: str, payload: dict[str, Any]) -> None:
        if diagnostic is None:
            return
        try:
            diagnostic(name, payload)
        except Exception:  # noqa: BLE001
            logger.exception("Diagnostic hook raised while reporting %s", name)

    return emit


def create_fan_out(
    *,
    sinks: Sequence[SinkPort],
    listeners: Callable[[], Sequence[Listener]],
    diagnostic: DiagnosticHook = None,
) -> Callable[[LogMessage], None]:
    """Build the worker handed to the queue adapter.

    Parameters
    ----------
    sinks:
        Destinations written in order for every message.
    listeners:
        Zero-argument callable returning the current listener snapshot; read
        once per message so subscriptions take effect for the next message.
    diagnostic:
        Optional hook receiving ``sink_write_error`` and ``listener_error``
        reports.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> seen = []
    >>> class Boom:
    ...     name = 'boom'
    ...     def emit(self, message):
    ...         raise OSError('disk full')
    >>> class Keep:
    ...     name = 'keep'
    ...     def emit(self, message):
    ...         seen.append(message.text)
    >>> fan_out = create_fan_out(sinks=[Boom(), Keep()], listeners=lambda: (), diagnostic=lambda name, payload: seen.append(name))
    >>> fan_out(LogMessage('hello', datetime(2025, 9, 30, tzinfo=timezone.utc)))
    >>> seen
    ['sink_write_error', 'hello']
    """

    emit_diagnostic = build_diagnostic_emitter(diagnostic)
    ordered_sinks = tuple(sinks)

    def fan_out(message: LogMessage) -> None:
        for sink in ordered_sinks:
            try:
                sink.emit(message)
            except Exception as exc:  # noqa: BLE001
                name = _sink_name(sink)
                error = SinkWriteError(name, message)
                error.__cause__ = exc
                logger.error("Sink %s failed to write a log message", name, exc_info=exc)
                emit_diagnostic("sink_write_error", {"sink": name, "error": error, "exception": repr(exc)})

        line = message.render()
        for listener in listeners():
            try:
                listener(line)
            except Exception as exc:  # noqa: BLE001
                logger.error("Log listener %r raised; continuing", listener, exc_info=exc)
                emit_diagnostic("listener_error", {"listener": repr(listener), "exception": repr(exc)})

    return fan_out


__all__ = ["DiagnosticHook", "build_diagnostic_emitter", "create_fan_out"]
