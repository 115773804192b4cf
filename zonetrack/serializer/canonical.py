"""Canonical JSON serialization for tracker state.

Output is deterministic (sorted keys, 2-space indent, trailing newline)
so the sidecar hash only changes when the content does.
"""

import hashlib
import json
from typing import Type, TypeVar

from pydantic import BaseModel


T = TypeVar("T", bound=BaseModel)


def serialize_to_json(obj: BaseModel) -> str:
    """Serialize a pydantic model to canonical JSON.

    Args:
        obj: Model to serialize

    Returns:
        Canonical JSON string ending in a newline
    """
    data = obj.model_dump(mode="json")
    content = json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True)
    return content + "\n"


def deserialize_from_json(content: str, model_class: Type[T]) -> T:
    """Parse JSON text and validate it as ``model_class``.

    Raises:
        json.JSONDecodeError: If content is not JSON
        pydantic.ValidationError: If the structure does not validate
    """
    return model_class.model_validate(json.loads(content))


def compute_hash(content: str) -> str:
    """Hex-encoded SHA256 of ``content``."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()
