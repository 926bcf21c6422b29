"""Local text surgery that keeps the full prompt in step with field edits."""

from __future__ import annotations

from models.prompt_models import FULL_PROMPT_KEY, PROMPT_FIELDS, StructuredPrompt


def normalize_full_prompt(text: str) -> str:
    """Split on commas, strip each segment, drop empty ones and rejoin with ", "."""
    return ", ".join(segment.strip() for segment in text.split(",") if segment.strip())


def apply_field_edit(prompt: StructuredPrompt, key: str, value: str) -> StructuredPrompt:
    """Return ``prompt`` with one named field changed and the full prompt patched to match.

    A non-blank previous value is swapped for the new one at its first literal
    occurrence in the full prompt. If the previous value no longer appears
    verbatim nothing is substituted and the stale text stays; only
    normalization is applied. A blank previous value means the component is
    new, so a non-blank value is appended as its own comma-separated segment.
    """
    if key not in PROMPT_FIELDS:
        raise ValueError(f"Not a named prompt field: {key}")

    old_value = prompt.get(key)
    full_prompt = prompt.full_prompt

    if old_value.strip():
        full_prompt = full_prompt.replace(old_value, value, 1)
    elif value.strip():
        full_prompt = value if not full_prompt.strip() else f"{full_prompt}, {value}"

    return prompt.with_value(key, value).with_value(FULL_PROMPT_KEY, normalize_full_prompt(full_prompt))
