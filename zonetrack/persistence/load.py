"""Load tracker state.

load_dry_run: validate file integrity without building a Tracker
load_state:   hydrate a Tracker (and its Manifest) from file
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from zonetrack.app import Tracker
from zonetrack.dto.manifest import CURRENT_SCHEMA_VERSION, Manifest
from zonetrack.dto.tracker_state import TrackerStateDTO, from_dto
from zonetrack.persistence.save import hash_path_for
from zonetrack.serializer.canonical import compute_hash, deserialize_from_json


logger = logging.getLogger(__name__)


class StateLoadError(ValueError):
    """Persisted state is missing, tampered with, or malformed."""

    def __init__(self, path: Path, errors: list[str]):
        self.path = path
        self.errors = errors
        super().__init__(f"Invalid state file {path}: {'; '.join(errors)}")


def _is_compatible_version(file_version: str, current_version: str) -> bool:
    """Same major version means compatible."""
    try:
        return int(file_version.split(".")[0]) == int(current_version.split(".")[0])
    except (ValueError, IndexError):
        return False


def load_dry_run(path: Path) -> tuple[bool, list[str]]:
    """Validate a state file without loading it.

    Checks:
    1. File exists
    2. Hash file exists and matches
    3. JSON is valid
    4. Schema version is compatible
    5. Structure validates (including matrix consistency)

    Returns:
        Tuple of (is_valid, list of error messages)
    """
    if not path.exists():
        return False, [f"File not found: {path}"]

    hash_path = hash_path_for(path)
    if not hash_path.exists():
        return False, [f"Hash file not found: {hash_path}"]

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        return False, [f"Failed to read file: {e}"]

    expected_hash = hash_path.read_text(encoding="utf-8").strip()
    actual_hash = compute_hash(content)
    if actual_hash != expected_hash:
        return False, [
            f"Hash mismatch: expected {expected_hash[:16]}..., got {actual_hash[:16]}..."
        ]

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        return False, [f"Invalid JSON: {e}"]

    if not isinstance(data, dict):
        return False, ["Invalid state structure: top level must be an object"]

    manifest = data.get("manifest", {})
    if not isinstance(manifest, dict):
        manifest = {}
    schema_version = manifest.get("schema_version", "unknown")
    if not _is_compatible_version(schema_version, CURRENT_SCHEMA_VERSION):
        return False, [
            f"Schema version mismatch: file has {schema_version}, "
            f"current is {CURRENT_SCHEMA_VERSION}"
        ]

    try:
        TrackerStateDTO.model_validate(data)
    except ValidationError as e:
        return False, [f"Invalid state structure: {e}"]

    return True, []


def load_state_dto(path: Path) -> TrackerStateDTO:
    """Validate and parse a state file.

    Raises:
        StateLoadError: If the file fails any dry-run check
    """
    is_valid, errors = load_dry_run(path)
    if not is_valid:
        logger.error("Refusing to load %s: %s", path, "; ".join(errors))
        raise StateLoadError(path, errors)

    content = path.read_text(encoding="utf-8")
    return deserialize_from_json(content, TrackerStateDTO)


def load_state(path: Path) -> tuple[Tracker, Manifest]:
    """Load a Tracker from file.

    Raises:
        StateLoadError: If the file is missing or invalid
    """
    dto = load_state_dto(path)
    logger.info("Loaded state from %s", path)
    return from_dto(dto), dto.manifest
