"""Save tracker state to canonical JSON plus a hash sidecar."""

import logging
from datetime import datetime, timezone
from pathlib import Path

from zonetrack.app import Tracker
from zonetrack.dto.manifest import Manifest
from zonetrack.dto.tracker_state import to_dto
from zonetrack.serializer.canonical import compute_hash, serialize_to_json


logger = logging.getLogger(__name__)


def hash_path_for(path: Path) -> Path:
    """Sidecar file holding the SHA256 of ``path``."""
    return Path(str(path) + ".sha256")


def save_state(tracker: Tracker, path: Path, manifest: Manifest | None = None) -> str:
    """Save tracker state.

    Creates:
    - path: canonical JSON state
    - path.sha256: hash file for integrity verification

    Args:
        tracker: Tracker to save
        path: Destination file
        manifest: Manifest of a previous load, kept so ``created_at`` survives

    Returns:
        SHA256 hash of the saved content
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    manifest = (manifest or Manifest()).model_copy(
        update={"modified_at": datetime.now(timezone.utc)}
    )
    content = serialize_to_json(to_dto(tracker, manifest))
    content_hash = compute_hash(content)

    path.write_text(content, encoding="utf-8")
    hash_path_for(path).write_text(content_hash, encoding="utf-8")

    logger.info("Saved state to %s (%s)", path, content_hash[:12])
    return content_hash
