"""Serializer module for zonetrack."""

from zonetrack.serializer.canonical import (
    compute_hash,
    deserialize_from_json,
    serialize_to_json,
)

__all__ = [
    "compute_hash",
    "deserialize_from_json",
    "serialize_to_json",
]
