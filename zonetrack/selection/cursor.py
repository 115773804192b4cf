"""Selection - the four-axis cursor.

Holds one optional Selector per axis level:

- ``map``     against the store's Maps
- ``zone``    against the Zones of whichever Map ``map`` resolves to
- ``ability`` against the store's Abilities
- ``usage``   against the Usages of whichever Ability ``ability`` resolves to

The (map, zone) and (ability, usage) pairs never interact. Within a pair
the parent is always resolved before the child, because the child's
collection depends on which parent was picked.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace

from zonetrack.model.entities import Ability, Map
from zonetrack.selection.selector import Index, Selector


def _zones(m: Map):
    return m.zones


def _usages(a: Ability):
    return a.usages


def _convert_pair(
    parents: Sequence,
    children_of: Callable,
    parent_sel: Selector | None,
    child_sel: Selector | None,
    to_index: bool,
) -> tuple[Selector | None, Selector | None]:
    """Convert a (parent, child) pair to index-form or name-form.

    The pair is returned unchanged when the parent does not resolve.
    """
    if parent_sel is None:
        return parent_sel, child_sel
    parent = parent_sel.resolve(parents)
    if parent is None:
        return parent_sel, child_sel

    kids = children_of(parent)
    if to_index:
        new_parent = parent_sel.to_index(parents)
        new_child = child_sel.to_index(kids) if child_sel is not None else None
    else:
        new_parent = parent_sel.to_name(parents)
        new_child = child_sel.to_name(kids) if child_sel is not None else None
    return new_parent, new_child


def _step_pair(
    parents: Sequence,
    children_of: Callable,
    parent_sel: Selector | None,
    child_sel: Selector | None,
    forward: bool,
) -> tuple[Index, Index] | None:
    """Move the child one step, wrapping across parents.

    Parents without children are skipped while wrapping. Returns None when
    nothing can be selected (no-op for the caller).
    """
    if parent_sel is None:
        return None
    parent_pos = parent_sel.to_index(parents)
    if parent_pos is None:
        return None

    pi = parent_pos.index
    kids = children_of(parents[pi])
    if not kids:
        return None

    child_pos = child_sel.to_index(kids) if child_sel is not None else None
    if child_pos is None:
        return Index(pi), Index(0 if forward else len(kids) - 1)

    ci = child_pos.index + (1 if forward else -1)
    if 0 <= ci < len(kids):
        return Index(pi), Index(ci)

    count = len(parents)
    for offset in range(1, count + 1):
        qi = (pi + offset) % count if forward else (pi - offset) % count
        q_kids = children_of(parents[qi])
        if q_kids:
            return Index(qi), Index(0 if forward else len(q_kids) - 1)
    return None


@dataclass
class Selection:
    """Cursor over the (Map, Zone, Ability, Usage) grid.

    Two selections are equal only when all four references are equal by
    value. ``Index(0)`` and ``Name("North")`` never compare equal even if
    they point at the same Zone; normalize both sides first.
    """

    map: Selector | None = None
    zone: Selector | None = None
    ability: Selector | None = None
    usage: Selector | None = None

    @classmethod
    def first(cls) -> "Selection":
        """Cursor on the first entry of every axis."""
        return cls(map=Index(0), zone=Index(0), ability=Index(0), usage=Index(0))

    @classmethod
    def parse(
        cls,
        map: str | None = None,
        zone: str | None = None,
        ability: str | None = None,
        usage: str | None = None,
    ) -> "Selection":
        """Build a selection from raw user strings."""

        def sel(text):
            return Selector.parse(text) if text is not None else None

        return cls(map=sel(map), zone=sel(zone), ability=sel(ability), usage=sel(usage))

    @property
    def is_complete(self) -> bool:
        return None not in (self.map, self.zone, self.ability, self.usage)

    def copy(self) -> "Selection":
        return replace(self)

    # --- normalization ---

    def absolute(self, maps: Sequence[Map], abilities: Sequence[Ability]) -> "Selection":
        """Return a copy with every resolvable reference in index-form."""
        m, z = _convert_pair(maps, _zones, self.map, self.zone, to_index=True)
        a, u = _convert_pair(abilities, _usages, self.ability, self.usage, to_index=True)
        return Selection(map=m, zone=z, ability=a, usage=u)

    def relative(self, maps: Sequence[Map], abilities: Sequence[Ability]) -> "Selection":
        """Return a copy with every resolvable reference in name-form."""
        m, z = _convert_pair(maps, _zones, self.map, self.zone, to_index=False)
        a, u = _convert_pair(abilities, _usages, self.ability, self.usage, to_index=False)
        return Selection(map=m, zone=z, ability=a, usage=u)

    def make_absolute(self, maps: Sequence[Map], abilities: Sequence[Ability]) -> None:
        fixed = self.absolute(maps, abilities)
        self.map, self.zone, self.ability, self.usage = (
            fixed.map, fixed.zone, fixed.ability, fixed.usage
        )

    def make_relative(self, maps: Sequence[Map], abilities: Sequence[Ability]) -> None:
        fixed = self.relative(maps, abilities)
        self.map, self.zone, self.ability, self.usage = (
            fixed.map, fixed.zone, fixed.ability, fixed.usage
        )

    # --- navigation ---

    def next_zone(self, maps: Sequence[Map]) -> None:
        self._move_zone(maps, forward=True)

    def prev_zone(self, maps: Sequence[Map]) -> None:
        self._move_zone(maps, forward=False)

    def next_usage(self, abilities: Sequence[Ability]) -> None:
        self._move_usage(abilities, forward=True)

    def prev_usage(self, abilities: Sequence[Ability]) -> None:
        self._move_usage(abilities, forward=False)

    def _move_zone(self, maps: Sequence[Map], forward: bool) -> None:
        moved = _step_pair(maps, _zones, self.map, self.zone, forward)
        if moved is not None:
            self.map, self.zone = moved

    def _move_usage(self, abilities: Sequence[Ability], forward: bool) -> None:
        moved = _step_pair(abilities, _usages, self.ability, self.usage, forward)
        if moved is not None:
            self.ability, self.usage = moved

    def __str__(self) -> str:
        parts = [self.map, self.zone, self.ability, self.usage]
        return " / ".join("-" if p is None else str(p) for p in parts)
