"""Model module for zonetrack.

The progress matrix lives in ``zonetrack.model.store``; it is not
re-exported here because it depends on ``zonetrack.selection``.
"""

from zonetrack.model.entities import (
    DEFAULT_TARGET,
    Ability,
    Map,
    Named,
    Target,
    Usage,
    Zone,
)

__all__ = [
    "DEFAULT_TARGET",
    "Ability",
    "Map",
    "Named",
    "Target",
    "Usage",
    "Zone",
]
