from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from lib_biome.adapters.serialization import create_serializer
from lib_biome.application.use_cases.demo import run_demo, sample_flora
from lib_biome.domain.organisms import ORGANISM_CODEC, fauna, flora
from lib_biome.errors import NotFoundError


class MissingFileSerializer:
    """Serializer that writes nowhere and never finds anything."""

    def serialize(self, value: object, location: str | Path) -> None:
        return None

    def deserialize(self, location: str | Path) -> object:
        raise NotFoundError(location)


@pytest.mark.parametrize("fmt", ["xml", "json"])
def test_demo_sorts_persists_and_describes(fmt: str, tmp_path: Path) -> None:
    messages: list[str] = []
    location = tmp_path / f"flora.{fmt}"

    restored = asyncio.run(
        run_demo(log=messages.append, serializer=create_serializer(fmt, ORGANISM_CODEC), location=location)
    )

    assert [item.name for item in restored] == ["Oak", "Pine", "Rose"]
    assert location.exists()
    assert messages == [
        "Sorting started...",
        "Sorting completed. Processed 3 items.",
        f"Serialized to {location}",
        "Territory: Meadow",
        "Flora: Oak (Tree)",
        "Flora: Pine (Tree)",
        "Flora: Rose (Flower)",
        "Oak grows in the sunlight.",
        "Pine grows in the sunlight.",
        "Rose grows in the sunlight.",
    ]


def test_demo_accepts_custom_organisms(tmp_path: Path) -> None:
    messages: list[str] = []
    organisms = [fauna("Wolf", "Mammal"), flora("Fern", "Plant")]

    restored = asyncio.run(
        run_demo(
            log=messages.append,
            serializer=create_serializer("json", ORGANISM_CODEC),
            location=tmp_path / "mixed.json",
            organisms=organisms,
            territory_name="Forest",
        )
    )

    assert [item.name for item in restored] == ["Fern", "Wolf"]
    assert "Territory: Forest" in messages
    assert "Fauna: Wolf (Mammal)" in messages
    assert "Wolf feeds on plants." in messages
    assert [item.name for item in organisms] == ["Wolf", "Fern"]


def test_demo_logs_failures_before_raising(tmp_path: Path) -> None:
    messages: list[str] = []

    with pytest.raises(NotFoundError):
        asyncio.run(run_demo(log=messages.append, serializer=MissingFileSerializer(), location=tmp_path / "gone.xml"))

    assert messages[-1].startswith("Exception: ")
    assert "gone.xml" in messages[-1]


def test_sample_flora_is_unsorted_and_fresh() -> None:
    first = sample_flora()
    first.clear()
    assert [item.name for item in sample_flora()] == ["Oak", "Rose", "Pine"]
