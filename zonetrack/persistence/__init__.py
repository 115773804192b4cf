"""Persistence module for zonetrack state."""

from zonetrack.persistence.load import (
    StateLoadError,
    load_dry_run,
    load_state,
    load_state_dto,
)
from zonetrack.persistence.save import hash_path_for, save_state

__all__ = [
    "StateLoadError",
    "hash_path_for",
    "load_dry_run",
    "load_state",
    "load_state_dto",
    "save_state",
]
