"""Named entities of the two tracking axes.

Location axis: Map -> ordered Zones.
Task axis:     Ability -> ordered Usages.

Every entity carries a ``name`` that is unique among its siblings.
Maps and Abilities compare and hash by name only; their children are
not part of their identity.
"""

from dataclasses import dataclass, field
from typing import Protocol


DEFAULT_PROGRESS = 0
DEFAULT_TARGET = 2


class Named(Protocol):
    """Anything addressable by name inside an ordered collection."""

    name: str


@dataclass
class Zone:
    """A sub-location within a Map."""

    name: str


@dataclass
class Usage:
    """A specific task instance within an Ability."""

    name: str


@dataclass(eq=False)
class Map:
    """Top-level location grouping. Owns an ordered list of Zones."""

    name: str
    zones: list[Zone] = field(default_factory=list)

    def add_zone(self, zone: Zone) -> None:
        self.zones.append(zone)

    def zone_names(self) -> list[str]:
        return [z.name for z in self.zones]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Map):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(("map", self.name))


@dataclass(eq=False)
class Ability:
    """Top-level task grouping. Owns an ordered list of Usages."""

    name: str
    usages: list[Usage] = field(default_factory=list)

    def add_usage(self, usage: Usage) -> None:
        self.usages.append(usage)

    def usage_names(self) -> list[str]:
        return [u.name for u in self.usages]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ability):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(("ability", self.name))


@dataclass
class Target:
    """Progress counter paired with a goal.

    ``progress`` is unconstrained (it may exceed ``target`` or go
    negative). ``target`` never drops below zero.
    """

    progress: int = DEFAULT_PROGRESS
    target: int = DEFAULT_TARGET

    def change_progress(self, delta: int) -> None:
        self.progress += delta

    def change_target(self, delta: int) -> None:
        self.target = max(self.target + delta, 0)

    def match_target_to_progress(self) -> None:
        self.target = max(self.progress, 0)

    def match_progress_to_target(self) -> None:
        self.progress = self.target

    def zero_progress(self) -> None:
        self.progress = 0

    def zero_target(self) -> None:
        self.target = 0

    @property
    def is_complete(self) -> bool:
        return self.target <= self.progress

