"""Orchestration of the sample run: sort, persist, reload, render.

Purpose
-------
Exercise the sorter and a serializer end-to-end, narrating every step
through the log sink.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from lib_biome.application.ports.serializer import SerializerPort
from lib_biome.application.ports.sink import MessageSink
from lib_biome.domain.organisms import Organism, Territory, flora
from lib_biome.errors import BiomeError

from .sort import by_name, sort_async


def sample_flora() -> list[Organism]:
    """Return the unsorted flora used when the caller supplies none."""

    return [flora("Oak", "Tree"), flora("Rose", "Flower"), flora("Pine", "Tree")]


async def run_demo(
    *,
    log: MessageSink,
    serializer: SerializerPort[list[Organism]],
    location: str | Path,
    organisms: Sequence[Organism] | None = None,
    territory_name: str = "Meadow",
) -> list[Organism]:
    """Sort ``organisms`` by name, round-trip them through ``serializer``, and log the result.

    Returns the organisms read back from ``location``.

    Raises
    ------
    BiomeError
        Any sort or serialization failure, after logging it as
        ``"Exception: <message>"``.
    """

    collection = list(organisms) if organisms is not None else sample_flora()
    try:
        await sort_async(collection, by_name, log)
        serializer.serialize(collection, location)
        log(f"Serialized to {location}")

        restored = serializer.deserialize(location)
        territory = Territory(territory_name)
        territory.extend(restored)
        for line in (*territory.describe(), *territory.simulate_cycle()):
            log(line)
    except BiomeError as exc:
        log(f"Exception: {exc}")
        raise
    return restored


__all__ = ["run_demo", "sample_flora"]
