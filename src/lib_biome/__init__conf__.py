"""Static package metadata surfaced by the CLI ``info`` command."""

from __future__ import annotations

import sys
from typing import Callable

name = "lib_biome"
title = "Flora/fauna sample with a queued log pipeline, async sort, and XML/JSON snapshots"
version = "0.1.0"
author = "lib_biome maintainers"
shell_command = "lib_biome"


def print_info(writer: Callable[[str], object] | None = None) -> None:
    """Emit the metadata banner one line at a time through ``writer``.

    Examples
    --------
    >>> lines = []
    >>> print_info(writer=lines.append)
    >>> lines[0]
    'Info for lib_biome:\\n'
    """

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("author", author),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    if writer is None:
        writer = sys.stdout.write
    writer(f"Info for {name}:\n")
    writer("\n")
    for label, value in fields:
        writer(f"    {label:<{pad}} = {value}\n")
