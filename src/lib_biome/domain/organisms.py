"""Flora/fauna organisms and the territories that host them.

Purpose
-------
Provide the sample records that the sorter orders and the serializers persist.

Contents
--------
* :class:`OrganismKind` - closed set of kinds carrying the describe/simulate
  capabilities.
* :class:`Organism` - immutable named record with a type tag.
* :class:`Territory` - mutable container that describes and simulates its
  organisms.
* :class:`OrganismCodec` / :data:`ORGANISM_CODEC` - field mapping used by the
  serializer adapters.

System Role
-----------
Behaviour is selected from the kind tag through ``_DESCRIBE_TABLE`` and
``_SIMULATION_TABLE`` instead of inspecting runtime subclasses.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum


class OrganismKind(Enum):
    """Kinds of organisms known to the model."""

    FLORA = "flora"
    FAUNA = "fauna"

    @property
    def label(self) -> str:
        """Return the capitalised name used in descriptions."""

        return _DESCRIBE_TABLE[self]

    def describe(self, organism: "Organism") -> str:
        """Return the one-line description for ``organism``."""

        return f"{self.label}: {organism.name} ({organism.type_tag})"

    def simulate_step(self, organism: "Organism") -> str:
        """Return what ``organism`` does during one simulation cycle."""

        return _SIMULATION_TABLE[self].format(name=organism.name)

    @classmethod
    def from_name(cls, name: str) -> "OrganismKind":
        """Resolve a case-insensitive kind name.

        Examples
        --------
        >>> OrganismKind.from_name(' Fauna ') is OrganismKind.FAUNA
        True
        >>> OrganismKind.from_name('fungi')
        Traceback (most recent call last):
        ...
        ValueError: Unknown organism kind: 'fungi'
        """

        normalized = name.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(f"Unknown organism kind: {name!r}")


_DESCRIBE_TABLE = {
    OrganismKind.FLORA: "Flora",
    OrganismKind.FAUNA: "Fauna",
}

_SIMULATION_TABLE = {
    OrganismKind.FLORA: "{name} grows in the sunlight.",
    OrganismKind.FAUNA: "{name} feeds on plants.",
}


@dataclass(slots=True, frozen=True)
class Organism:
    """Named organism with a free-form type tag such as ``Tree`` or ``Mammal``.

    Examples
    --------
    >>> oak = Organism('Oak', 'Tree')
    >>> oak.describe()
    'Flora: Oak (Tree)'
    >>> Organism('Wolf', 'Mammal', OrganismKind.FAUNA).simulate_step()
    'Wolf feeds on plants.'
    """

    name: str
    type_tag: str
    kind: OrganismKind = OrganismKind.FLORA

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must not be empty")

    def describe(self) -> str:
        return self.kind.describe(self)

    def simulate_step(self) -> str:
        return self.kind.simulate_step(self)


def flora(name: str, type_tag: str) -> Organism:
    """Shortcut for a :data:`OrganismKind.FLORA` organism."""

    return Organism(name, type_tag, OrganismKind.FLORA)


def fauna(name: str, type_tag: str) -> Organism:
    """Shortcut for a :data:`OrganismKind.FAUNA` organism."""

    return Organism(name, type_tag, OrganismKind.FAUNA)


@dataclass(slots=True)
class Territory:
    """A named area holding organisms in insertion order."""

    name: str
    organisms: list[Organism] = field(default_factory=list)

    def add(self, organism: Organism) -> None:
        self.organisms.append(organism)

    def extend(self, organisms: Iterable[Organism]) -> None:
        for organism in organisms:
            self.add(organism)

    def describe(self) -> list[str]:
        """Return the territory header followed by one line per organism."""

        return [f"Territory: {self.name}", *(organism.describe() for organism in self.organisms)]

    def simulate_cycle(self) -> list[str]:
        """Return one simulation line per organism."""

        return [organism.simulate_step() for organism in self.organisms]


class OrganismCodec:
    """Map :class:`Organism` records to flat string fields and back.

    Examples
    --------
    >>> ORGANISM_CODEC.to_fields(Organism('Oak', 'Tree'))
    {'name': 'Oak', 'type': 'Tree', 'kind': 'flora'}
    >>> ORGANISM_CODEC.from_fields({'name': 'Oak', 'type': 'Tree', 'kind': 'flora'})
    Organism(name='Oak', type_tag='Tree', kind=<OrganismKind.FLORA: 'flora'>)
    """

    record_name = "Organism"
    fields = ("name", "type", "kind")

    def to_fields(self, record: Organism) -> dict[str, str]:
        return {"name": record.name, "type": record.type_tag, "kind": record.kind.value}

    def from_fields(self, values: Mapping[str, str]) -> Organism:
        return Organism(
            name=values["name"],
            type_tag=values["type"],
            kind=OrganismKind.from_name(values["kind"]),
        )


ORGANISM_CODEC = OrganismCodec()


__all__ = [
    "ORGANISM_CODEC",
    "Organism",
    "OrganismCodec",
    "OrganismKind",
    "Territory",
    "fauna",
    "flora",
]
