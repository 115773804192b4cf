"""TrackerStateDTO - persisted shape of the whole tracker.

All saves/loads go through this DTO. It holds exactly:
- the Map/Zone and Ability/Usage collections, in display order
- the name-keyed Target entries
- the four-reference cursor

The validators reject states the core could never have produced
(duplicate sibling names, entries for unknown combinations, live
combinations without an entry).
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from zonetrack.app import Tracker
from zonetrack.dto.manifest import Manifest
from zonetrack.model.entities import DEFAULT_TARGET, Ability, Map, Target, Usage, Zone
from zonetrack.model.store import MatrixKey, ProgressStore
from zonetrack.selection.cursor import Selection
from zonetrack.selection.selector import Index, Name, Selector


class IndexSelectorDTO(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: Literal["index"] = "index"
    index: int = Field(ge=0, description="Position in the collection")


class NameSelectorDTO(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: Literal["name"] = "name"
    name: str = Field(description="Entity name")


SelectorDTO = Annotated[
    Union[IndexSelectorDTO, NameSelectorDTO],
    Field(discriminator="kind"),
]


class SelectionDTO(BaseModel):
    """Cursor, one optional selector per axis."""

    model_config = ConfigDict(extra="forbid")

    map: SelectorDTO | None = None
    zone: SelectorDTO | None = None
    ability: SelectorDTO | None = None
    usage: SelectorDTO | None = None


class MapDTO(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    zones: list[str] = Field(default_factory=list, description="Zone names in order")


class AbilityDTO(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    usages: list[str] = Field(default_factory=list, description="Usage names in order")


class TargetEntryDTO(BaseModel):
    """One matrix entry."""

    model_config = ConfigDict(extra="forbid")

    map: str
    zone: str
    ability: str
    usage: str
    progress: int = 0
    target: int = Field(default=DEFAULT_TARGET, ge=0)

    def key(self) -> MatrixKey:
        return MatrixKey(self.map, self.zone, self.ability, self.usage)


def _duplicates(names: list[str]) -> list[str]:
    seen: set[str] = set()
    dupes = []
    for n in names:
        if n in seen:
            dupes.append(n)
        seen.add(n)
    return dupes


class TrackerStateDTO(BaseModel):
    """Canonical persisted representation of a Tracker."""

    model_config = ConfigDict(extra="forbid")

    manifest: Manifest = Field(default_factory=Manifest)

    name: str = Field(default="Progress", description="Title of the progress table")

    default_target: int = Field(
        default=DEFAULT_TARGET,
        ge=0,
        description="Target assigned to newly created entries",
    )

    maps: list[MapDTO] = Field(default_factory=list)
    abilities: list[AbilityDTO] = Field(default_factory=list)
    targets: list[TargetEntryDTO] = Field(default_factory=list)

    selection: SelectionDTO = Field(default_factory=SelectionDTO)

    @model_validator(mode="after")
    def check_matrix(self) -> "TrackerStateDTO":
        errors = []
        for label, names in (
            ("map", [m.name for m in self.maps]),
            ("ability", [a.name for a in self.abilities]),
        ):
            for dupe in _duplicates(names):
                errors.append(f"duplicate {label} name: {dupe!r}")
        for m in self.maps:
            for dupe in _duplicates(m.zones):
                errors.append(f"duplicate zone {dupe!r} in map {m.name!r}")
        for a in self.abilities:
            for dupe in _duplicates(a.usages):
                errors.append(f"duplicate usage {dupe!r} in ability {a.name!r}")

        live = {
            MatrixKey(m.name, z, a.name, u)
            for m in self.maps
            for z in m.zones
            for a in self.abilities
            for u in a.usages
        }
        stored = [t.key() for t in self.targets]
        for dupe in _duplicates(stored):
            errors.append(f"duplicate target entry: {tuple(dupe)}")
        unknown = [k for k in stored if k not in live]
        missing = live - set(stored)
        if unknown:
            errors.append(
                f"{len(unknown)} target entries reference unknown names, "
                f"e.g. {tuple(unknown[0])}"
            )
        if missing:
            errors.append(
                f"{len(missing)} combinations have no target entry, "
                f"e.g. {tuple(sorted(missing)[0])}"
            )

        if errors:
            raise ValueError("; ".join(errors))
        return self


def _selector_to_dto(sel: Selector | None):
    if sel is None:
        return None
    if isinstance(sel, Index):
        return IndexSelectorDTO(index=sel.index)
    return NameSelectorDTO(name=sel.name)


def _selector_from_dto(dto) -> Selector | None:
    if dto is None:
        return None
    if isinstance(dto, IndexSelectorDTO):
        return Index(dto.index)
    return Name(dto.name)


def to_dto(tracker: Tracker, manifest: Manifest | None = None) -> TrackerStateDTO:
    """Snapshot a tracker into its persisted shape."""
    store = tracker.store
    sel = tracker.selection
    return TrackerStateDTO(
        manifest=manifest or Manifest(),
        name=store.name,
        default_target=store.default_target,
        maps=[MapDTO(name=m.name, zones=m.zone_names()) for m in store.maps],
        abilities=[AbilityDTO(name=a.name, usages=a.usage_names()) for a in store.abilities],
        targets=[
            TargetEntryDTO(
                map=key.map,
                zone=key.zone,
                ability=key.ability,
                usage=key.usage,
                progress=t.progress,
                target=t.target,
            )
            for key, t in store.targets.items()
        ],
        selection=SelectionDTO(
            map=_selector_to_dto(sel.map),
            zone=_selector_to_dto(sel.zone),
            ability=_selector_to_dto(sel.ability),
            usage=_selector_to_dto(sel.usage),
        ),
    )


def from_dto(dto: TrackerStateDTO) -> Tracker:
    """Rebuild a tracker. Targets are taken verbatim from the entries."""
    store = ProgressStore(name=dto.name, default_target=dto.default_target)
    store.maps = [Map(m.name, [Zone(z) for z in m.zones]) for m in dto.maps]
    store.abilities = [Ability(a.name, [Usage(u) for u in a.usages]) for a in dto.abilities]
    store.targets = {
        t.key(): Target(progress=t.progress, target=t.target) for t in dto.targets
    }
    selection = Selection(
        map=_selector_from_dto(dto.selection.map),
        zone=_selector_from_dto(dto.selection.zone),
        ability=_selector_from_dto(dto.selection.ability),
        usage=_selector_from_dto(dto.selection.usage),
    )
    return Tracker(store=store, selection=selection)
