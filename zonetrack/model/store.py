"""ProgressStore - the sparse progress matrix.

Entries are keyed by resolved names ``(map, zone, ability, usage)`` so the
matrix is unaffected by positional shifts in the backing collections.

Population is incremental:
- adding a Zone creates one Target per existing (Ability, Usage)
- adding a Usage creates one Target per existing (Map, Zone)

Removal purges every entry that mentions the removed entity, so every key
in the matrix always corresponds to a live combination.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import NamedTuple

from zonetrack.model.entities import (
    DEFAULT_TARGET,
    Ability,
    Map,
    Target,
    Usage,
    Zone,
)
from zonetrack.selection.cursor import Selection
from zonetrack.selection.selector import Name, Selector


logger = logging.getLogger(__name__)


class MatrixKey(NamedTuple):
    """Name-keyed coordinate of one Target."""

    map: str
    zone: str
    ability: str
    usage: str


@dataclass
class RenderCell:
    """One matrix cell as seen by the grid view.

    ``target`` is None when the coordinate does not resolve to an entry.
    """

    map: str
    zone: str
    target: Target | None
    is_selected: bool


@dataclass
class RenderRow:
    ability: str
    usage: str
    cells: list[RenderCell]


class ProgressStore:
    """Ordered Maps and Abilities plus the name-keyed Target matrix."""

    def __init__(
        self,
        name: str = "Progress",
        default_target: int = DEFAULT_TARGET,
    ):
        self.name = name
        self.default_target = default_target
        self.maps: list[Map] = []
        self.abilities: list[Ability] = []
        self.targets: dict[MatrixKey, Target] = {}

    def _new_target(self) -> Target:
        return Target(progress=0, target=self.default_target)

    # --- structural growth ---

    def add_map(self, m: Map) -> bool:
        """Append a Map. Creates no Target entries by itself.

        Zones already attached to ``m`` are registered through
        :meth:`add_zone` so the matrix stays complete.
        """
        if Name(m.name).resolve(self.maps) is not None:
            logger.warning("Map %r already exists", m.name)
            return False
        zones, m.zones = list(m.zones), []
        self.maps.append(m)
        logger.debug("Added map %r", m.name)
        for zone in zones:
            self.add_zone(Name(m.name), zone)
        return True

    def add_zone(self, map_ref: Selector, zone: Zone) -> bool:
        """Append ``zone`` to the Map ``map_ref`` resolves to.

        Inserts a default Target for every existing (Ability, Usage).
        No-op when ``map_ref`` does not resolve.
        """
        m = map_ref.resolve(self.maps)
        if m is None:
            logger.debug("add_zone: map %s not found", map_ref)
            return False
        if Name(zone.name).resolve(m.zones) is not None:
            logger.warning("Zone %r already exists in map %r", zone.name, m.name)
            return False

        m.add_zone(zone)
        created = 0
        for a in self.abilities:
            for u in a.usages:
                self.targets[MatrixKey(m.name, zone.name, a.name, u.name)] = self._new_target()
                created += 1
        logger.debug("Added zone %r to map %r (%d targets)", zone.name, m.name, created)
        return True

    def add_ability(self, a: Ability) -> bool:
        """Append an Ability. Creates no Target entries by itself."""
        if Name(a.name).resolve(self.abilities) is not None:
            logger.warning("Ability %r already exists", a.name)
            return False
        usages, a.usages = list(a.usages), []
        self.abilities.append(a)
        logger.debug("Added ability %r", a.name)
        for usage in usages:
            self.add_usage(Name(a.name), usage)
        return True

    def add_usage(self, ability_ref: Selector, usage: Usage) -> bool:
        """Append ``usage`` to the Ability ``ability_ref`` resolves to.

        Inserts a default Target for every existing (Map, Zone).
        No-op when ``ability_ref`` does not resolve.
        """
        a = ability_ref.resolve(self.abilities)
        if a is None:
            logger.debug("add_usage: ability %s not found", ability_ref)
            return False
        if Name(usage.name).resolve(a.usages) is not None:
            logger.warning("Usage %r already exists in ability %r", usage.name, a.name)
            return False

        a.add_usage(usage)
        created = 0
        for m in self.maps:
            for z in m.zones:
                self.targets[MatrixKey(m.name, z.name, a.name, usage.name)] = self._new_target()
                created += 1
        logger.debug("Added usage %r to ability %r (%d targets)", usage.name, a.name, created)
        return True

    # --- removal ---

    def _purge(self, **match: str) -> int:
        doomed = [
            key for key in self.targets
            if all(getattr(key, field) == value for field, value in match.items())
        ]
        for key in doomed:
            del self.targets[key]
        return len(doomed)

    def remove_map(self, name: str) -> bool:
        pos = Name(name).position(self.maps)
        if pos is None:
            return False
        del self.maps[pos]
        purged = self._purge(map=name)
        logger.debug("Removed map %r (%d targets purged)", name, purged)
        return True

    def remove_zone(self, map_name: str, name: str) -> bool:
        m = Name(map_name).resolve(self.maps)
        if m is None:
            return False
        pos = Name(name).position(m.zones)
        if pos is None:
            return False
        del m.zones[pos]
        purged = self._purge(map=map_name, zone=name)
        logger.debug("Removed zone %r from map %r (%d targets purged)", name, map_name, purged)
        return True

    def remove_ability(self, name: str) -> bool:
        pos = Name(name).position(self.abilities)
        if pos is None:
            return False
        del self.abilities[pos]
        purged = self._purge(ability=name)
        logger.debug("Removed ability %r (%d targets purged)", name, purged)
        return True

    def remove_usage(self, ability_name: str, name: str) -> bool:
        a = Name(ability_name).resolve(self.abilities)
        if a is None:
            return False
        pos = Name(name).position(a.usages)
        if pos is None:
            return False
        del a.usages[pos]
        purged = self._purge(ability=ability_name, usage=name)
        logger.debug(
            "Removed usage %r from ability %r (%d targets purged)", name, ability_name, purged
        )
        return True

    # --- lookup ---

    def resolve_key(self, selection: Selection) -> MatrixKey | None:
        """Resolve a complete selection to the names of its quadruple."""
        if not selection.is_complete:
            return None
        m = selection.map.resolve(self.maps)
        a = selection.ability.resolve(self.abilities)
        if m is None or a is None:
            return None
        z = selection.zone.resolve(m.zones)
        u = selection.usage.resolve(a.usages)
        if z is None or u is None:
            return None
        return MatrixKey(m.name, z.name, a.name, u.name)

    def get_target(self, selection: Selection) -> Target | None:
        """Target at the selected quadruple, or None.

        The returned object is the stored record; mutating it updates the
        matrix.
        """
        key = self.resolve_key(selection)
        if key is None:
            return None
        return self.targets.get(key)

    def live_keys(self) -> Iterator[MatrixKey]:
        """Every (Map, Zone) x (Ability, Usage) combination, in display order."""
        for a in self.abilities:
            for u in a.usages:
                for m in self.maps:
                    for z in m.zones:
                        yield MatrixKey(m.name, z.name, a.name, u.name)

    def orphaned_keys(self) -> list[MatrixKey]:
        """Matrix keys that no live combination reaches."""
        live = set(self.live_keys())
        return [key for key in self.targets if key not in live]

    def missing_keys(self) -> list[MatrixKey]:
        """Live combinations that have no Target entry."""
        return [key for key in self.live_keys() if key not in self.targets]

    def render_rows(self, selection: Selection) -> list[RenderRow]:
        """Every Usage row crossed with every Zone column.

        A cell is selected when its coordinate and ``selection`` normalize
        to the same index-form selection.
        """
        current = selection.absolute(self.maps, self.abilities)
        rows: list[RenderRow] = []
        for a in self.abilities:
            for u in a.usages:
                cells = []
                for m in self.maps:
                    for z in m.zones:
                        cell_sel = Selection(
                            map=Name(m.name),
                            zone=Name(z.name),
                            ability=Name(a.name),
                            usage=Name(u.name),
                        )
                        cells.append(
                            RenderCell(
                                map=m.name,
                                zone=z.name,
                                target=self.get_target(cell_sel),
                                is_selected=(
                                    cell_sel.absolute(self.maps, self.abilities) == current
                                ),
                            )
                        )
                rows.append(RenderRow(ability=a.name, usage=u.name, cells=cells))
        return rows
