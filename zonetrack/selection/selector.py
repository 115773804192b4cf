"""Selector - a by-name or by-index reference into an ordered collection.

A selector is never valid on its own; it only means something once it
is resolved against a particular collection:

- ``Name("North")`` survives insertions/removals as long as an entity
  named "North" still exists.
- ``Index(1)`` points at whatever sits at position 1 right now.

Resolution never raises. Anything that cannot be resolved yields None.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeVar

from zonetrack.model.entities import Named


N = TypeVar("N", bound=Named)


class Selector(ABC):
    """Base for ``Index`` and ``Name``."""

    __slots__ = ()

    @staticmethod
    def parse(text: str) -> "Selector":
        """Build a selector from free-form user text.

        Unsigned integer text (one leading "+" allowed) becomes an
        ``Index``, anything else a ``Name``.
        """
        digits = text[1:] if text.startswith("+") else text
        if digits.isascii() and digits.isdigit():
            return Index(int(digits))
        return Name(text)

    @abstractmethod
    def position(self, collection: Sequence[Named]) -> int | None:
        """Position of the referenced entity in ``collection``, or None."""

    def resolve(self, collection: Sequence[N]) -> N | None:
        """Return the referenced entity, or None."""
        pos = self.position(collection)
        if pos is None:
            return None
        return collection[pos]

    def to_index(self, collection: Sequence[Named]) -> "Index | None":
        """Lock this reference to the current position of its entity."""
        pos = self.position(collection)
        if pos is None:
            return None
        return Index(pos)

    def to_name(self, collection: Sequence[Named]) -> "Name | None":
        """Make this reference durable across positional shifts."""
        entity = self.resolve(collection)
        if entity is None:
            return None
        return Name(entity.name)


@dataclass(frozen=True, slots=True)
class Index(Selector):
    """Positional reference."""

    index: int

    def position(self, collection: Sequence[Named]) -> int | None:
        if 0 <= self.index < len(collection):
            return self.index
        return None

    def __str__(self) -> str:
        return str(self.index)


@dataclass(frozen=True, slots=True)
class Name(Selector):
    """Reference by entity name. First occurrence wins on duplicates."""

    name: str

    def position(self, collection: Sequence[Named]) -> int | None:
        for i, entity in enumerate(collection):
            if entity.name == self.name:
                return i
        return None

    def __str__(self) -> str:
        return self.name
