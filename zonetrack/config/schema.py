"""Configuration schema for zonetrack."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from zonetrack.model.entities import DEFAULT_TARGET


class TrackerConfig(BaseModel):
    """Configuration for a tracking session."""

    model_config = ConfigDict(extra="forbid")

    # Storage
    state_path: str = Field(
        default="zonetrack_state.json",
        description="State file read at startup and written on save-and-quit",
    )
    autosave: bool = Field(
        default=True,
        description="Write the state file when quitting with Q",
    )

    # Matrix
    title: str = Field(
        default="Progress",
        description="Title of a newly created progress table",
    )
    default_target: int = Field(
        default=DEFAULT_TARGET,
        ge=0,
        description="Target given to entries created by new zones/usages",
    )

    # Output
    color: bool = Field(
        default=True,
        description="Colour grid cells by completion",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Root log level for the CLI",
    )
