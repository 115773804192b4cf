"""Grid view for zonetrack."""

from zonetrack.ui.grid import build_grid, cell_status, cell_text, format_grid

__all__ = [
    "build_grid",
    "cell_status",
    "cell_text",
    "format_grid",
]
