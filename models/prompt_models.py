"""Structured prompt domain models for the prompt editor."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional

# Named fields in display order. Keys are the camelCase names used on the wire
# and in the model's tool schema; values are the dataclass attribute names.
PROMPT_FIELDS: Dict[str, str] = {
    "scene": "scene",
    "background": "background",
    "imageType": "image_type",
    "style": "style",
    "texture": "texture",
    "lighting": "lighting",
    "details": "details",
}

FULL_PROMPT_KEY = "fullPrompt"


class SyncPhase(str, Enum):
    """Lifecycle of the initial analysis for one uploaded image."""

    UNINITIALIZED = "uninitialized"
    ANALYZING = "analyzing"
    READY = "ready"


class FlowStatus(str, Enum):
    """Status of a single-shot request flow such as an image edit."""

    IDLE = "idle"
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class StructuredPrompt:
    """Seven named prompt components plus the flattened full prompt."""

    scene: str = ""
    background: str = ""
    image_type: str = ""
    style: str = ""
    texture: str = ""
    lighting: str = ""
    details: str = ""
    full_prompt: str = ""

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> "StructuredPrompt":
        """Build a prompt from camelCase keys, treating missing or null values as empty."""
        values = {attr: _as_text(data.get(key)) for key, attr in PROMPT_FIELDS.items()}
        values["full_prompt"] = _as_text(data.get(FULL_PROMPT_KEY))
        return cls(**values)

    def to_wire(self) -> Dict[str, str]:
        """Return the camelCase representation sent to the browser."""
        out = {key: getattr(self, attr) for key, attr in PROMPT_FIELDS.items()}
        out[FULL_PROMPT_KEY] = self.full_prompt
        return out

    def get(self, key: str) -> str:
        """Return a field value by its wire name."""
        return getattr(self, attribute_for(key))

    def with_value(self, key: str, value: str) -> "StructuredPrompt":
        """Return a copy with one field (wire name) replaced."""
        return replace(self, **{attribute_for(key): value})


def attribute_for(key: str) -> str:
    """Map a wire field name to its dataclass attribute, raising on unknown names."""
    if key == FULL_PROMPT_KEY:
        return "full_prompt"
    try:
        return PROMPT_FIELDS[key]
    except KeyError:
        raise ValueError(f"Unknown prompt field: {key}") from None


def _as_text(value: Optional[Any]) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)

