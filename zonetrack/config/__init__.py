"""Config module for zonetrack."""

from zonetrack.config.loader import get_config_hash, load_config, validate_config
from zonetrack.config.schema import TrackerConfig

__all__ = [
    "TrackerConfig",
    "get_config_hash",
    "load_config",
    "validate_config",
]
