"""Append-only file sink implementing :class:`SinkPort`."""

from __future__ import annotations

from pathlib import Path

from lib_biome.application.ports.sink import SinkPort
from lib_biome.domain.messages import LogMessage


class FileSinkAdapter(SinkPort):
    """Append each rendered line plus a newline to ``path``.

    The file is created on first write and never truncated. Only the
    pipeline's consumer thread writes to it.

    Examples
    --------
    >>> import tempfile
    >>> from datetime import datetime, timezone
    >>> target = Path(tempfile.mkdtemp()) / 'logs' / 'log.txt'
    >>> sink = FileSinkAdapter(target)
    >>> sink.emit(LogMessage('one', datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)))
    >>> target.read_text(encoding='utf-8')
    '[LOG 2025-09-30 12:00:00+00:00]: one\\n'
    """

    name = "file"

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def emit(self, message: LogMessage) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("a", encoding="utf-8") as fh:
            fh.write(message.render())
            fh.write("\n")


__all__ = ["FileSinkAdapter"]
