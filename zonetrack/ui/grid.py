"""Grid view of the progress matrix.

Columns are Zones grouped by Map, rows are Usages grouped by Ability:

              Overworld          Caves
              North    South     Deep
  Jump Double 0/2      [1/2]     -
       Triple 2/2      0/2       0/2

The map (ability) name is printed only above (beside) its first zone
(usage). The cell under the cursor is wrapped in brackets.
"""

from dataclasses import dataclass

import click

from zonetrack.model.entities import Target
from zonetrack.model.store import ProgressStore, RenderRow
from zonetrack.selection.cursor import Selection


UNRESOLVED_TEXT = "??"
DISABLED_TEXT = "-"

# Status → click colour
STATUS_COLORS: dict[str, str] = {
    "unresolved": "red",
    "disabled": "blue",
    "complete": "green",
    "partial": "yellow",
    "pending": "red",
}


@dataclass
class GridView:
    """Everything needed to draw the table."""

    title: str
    map_header: list[str]
    zone_header: list[str]
    rows: list[RenderRow]

    @property
    def column_count(self) -> int:
        return len(self.zone_header) + 2


def build_grid(store: ProgressStore, selection: Selection) -> GridView:
    map_header: list[str] = []
    zone_header: list[str] = []
    for m in store.maps:
        for i, z in enumerate(m.zones):
            map_header.append(m.name if i == 0 else "")
            zone_header.append(z.name)
    return GridView(
        title=store.name,
        map_header=map_header,
        zone_header=zone_header,
        rows=store.render_rows(selection),
    )


def cell_text(target: Target | None) -> str:
    if target is None:
        return UNRESOLVED_TEXT
    if target.target == 0:
        return DISABLED_TEXT
    return f"{target.progress}/{target.target}"


def cell_status(target: Target | None) -> str:
    """Classify a cell for colouring.

    partial means progress has reached a quarter of the target.
    """
    if target is None:
        return "unresolved"
    if target.target == 0:
        return "disabled"
    if target.is_complete:
        return "complete"
    if target.target >> 2 <= target.progress:
        return "partial"
    return "pending"


def format_grid(view: GridView, color: bool = True) -> str:
    """Render the view as aligned text lines."""
    table: list[list[tuple[str, str | None]]] = [
        [("", None), ("", None)] + [(h, None) for h in view.map_header],
        [("", None), ("", None)] + [(h, None) for h in view.zone_header],
    ]

    last_ability = None
    for row in view.rows:
        label = row.ability if row.ability != last_ability else ""
        last_ability = row.ability
        line = [(label, None), (row.usage, None)]
        for cell in row.cells:
            text = cell_text(cell.target)
            if cell.is_selected:
                text = f"[{text}]"
            line.append((text, cell_status(cell.target)))
        table.append(line)

    widths = [0] * view.column_count
    for line in table:
        for i, (text, _) in enumerate(line):
            widths[i] = max(widths[i], len(text))

    out = [click.style(view.title, bold=True) if color else view.title]
    for line in table:
        parts = []
        for i, (text, status) in enumerate(line):
            padded = text.ljust(widths[i])
            if color and status is not None:
                padded = click.style(padded, fg=STATUS_COLORS[status])
            parts.append(padded)
        out.append("  ".join(parts).rstrip())
    return "\n".join(out)
