"""Selection module for zonetrack."""

from zonetrack.selection.cursor import Selection
from zonetrack.selection.selector import Index, Name, Selector

__all__ = [
    "Index",
    "Name",
    "Selection",
    "Selector",
]
