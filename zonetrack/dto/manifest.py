"""Manifest schema for saved tracker state.

The manifest carries metadata about a save, not tracker content.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


# Current schema version - increment the major part on breaking changes
CURRENT_SCHEMA_VERSION = "1.0.0"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Manifest(BaseModel):
    """Manifest for tracker state persistence."""

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(
        default=CURRENT_SCHEMA_VERSION,
        description="Schema version for compatibility",
    )

    created_at: datetime = Field(
        default_factory=_utcnow,
        description="Timestamp when the state was first saved",
    )

    modified_at: datetime | None = Field(
        default=None,
        description="Timestamp of the latest save",
    )

    description: str = Field(
        default="",
        description="Optional description of this save",
    )
