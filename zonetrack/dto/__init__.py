"""DTO module for zonetrack state."""

from zonetrack.dto.manifest import CURRENT_SCHEMA_VERSION, Manifest
from zonetrack.dto.tracker_state import (
    AbilityDTO,
    IndexSelectorDTO,
    MapDTO,
    NameSelectorDTO,
    SelectionDTO,
    TargetEntryDTO,
    TrackerStateDTO,
    from_dto,
    to_dto,
)

__all__ = [
    "CURRENT_SCHEMA_VERSION",
    "Manifest",
    "AbilityDTO",
    "IndexSelectorDTO",
    "MapDTO",
    "NameSelectorDTO",
    "SelectionDTO",
    "TargetEntryDTO",
    "TrackerStateDTO",
    "from_dto",
    "to_dto",
]
