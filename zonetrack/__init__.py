"""zonetrack: completion tracking over a Map/Zone x Ability/Usage grid.

This package provides:
- Entity collections and the progress matrix (zonetrack/model/)
- Name-or-index selectors and the four-axis cursor (zonetrack/selection/)
- Application state and key dispatch (zonetrack/app.py)
- State DTOs, canonical serialization, save/load
  (zonetrack/dto/, zonetrack/serializer/, zonetrack/persistence/)
- Config management (zonetrack/config/)
- Grid view (zonetrack/ui/)
- CLI (zonetrack/cli.py)
"""

__version__ = "0.1.0"
