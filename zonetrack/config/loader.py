"""Config loading and validation for zonetrack."""

import hashlib
from pathlib import Path

import yaml
from pydantic import ValidationError

from zonetrack.config.schema import TrackerConfig


def load_config(path: Path | None = None) -> TrackerConfig:
    """Load config from a YAML file, or defaults when there is none.

    Raises:
        yaml.YAMLError: If the file is not valid YAML
        pydantic.ValidationError: If a value is out of range or unknown
    """
    if path is None or not path.exists():
        return TrackerConfig()

    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return TrackerConfig.model_validate(data)


def validate_config(path: Path) -> tuple[bool, list[str]]:
    """Validate a config file.

    Returns:
        Tuple of (is_valid, list of errors)
    """
    if not path.exists():
        return False, [f"Config file not found: {path}"]

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        return False, [f"Invalid YAML: {e}"]

    if data is None:
        data = {}
    if not isinstance(data, dict):
        return False, ["Config must be a mapping"]

    try:
        TrackerConfig.model_validate(data)
    except ValidationError as e:
        return False, [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        ]
    return True, []


def get_config_hash(config: TrackerConfig) -> str:
    """Short hash of the config, for change detection."""
    content = config.model_dump_json(indent=None)
    return hashlib.sha256(content.encode()).hexdigest()[:12]
