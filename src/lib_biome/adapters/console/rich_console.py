"""Rich-powered console sink implementing :class:`SinkPort`.

Purpose
-------
Print each rendered log line to the terminal through Rich so colour handling
honours ``force_color``/``no_color`` and the configured style.

Contents
--------
* :class:`RichConsoleAdapter` - adapter constructed by the runtime composition.

System Role
-----------
Primary human-facing sink; runs only on the pipeline's consumer thread.
"""

from __future__ import annotations

from rich.console import Console

from lib_biome.application.ports.sink import SinkPort
from lib_biome.domain.messages import LogMessage


class RichConsoleAdapter(SinkPort):
    """Render log messages as ``[LOG <timestamp>]: <text>`` lines."""

    name = "console"

    def __init__(
        self,
        *,
        console: Console | None = None,
        force_color: bool = False,
        no_color: bool = False,
        style: str = "cyan",
    ) -> None:
        """Configure the console adapter with colour overrides."""
        if console is not None:
            self._console = console
        else:
            self._console = Console(force_terminal=force_color or None, no_color=no_color)
        self._no_color = no_color
        self._style = style

    def emit(self, message: LogMessage) -> None:
        """Print ``message`` as one line.

        Examples
        --------
        >>> from datetime import datetime, timezone
        >>> from io import StringIO
        >>> console = Console(file=StringIO(), record=True, width=120)
        >>> adapter = RichConsoleAdapter(console=console)
        >>> adapter.emit(LogMessage('msg [red]', datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)))
        >>> console.export_text()
        '[LOG 2025-09-30 12:00:00+00:00]: msg [red]\\n'
        """
        style = "" if self._no_color else self._style
        self._console.print(message.render(), style=style, markup=False, highlight=False, soft_wrap=True)


__all__ = ["RichConsoleAdapter"]
