"""Helpers to parse Responses and Images API outputs."""

import json
from typing import Any, Dict, Optional

from models.prompt_models import StructuredPrompt


def parse_prompt_call(response: Any, *, tool_name: str) -> StructuredPrompt:
    """Extract the prompt breakdown from the function call for the given tool."""
    for item in getattr(response, "output", None) or []:
        if getattr(item, "type", None) != "function_call" or getattr(item, "name", None) != tool_name:
            continue
        try:
            args = json.loads(getattr(item, "arguments", "{}") or "{}")
        except json.JSONDecodeError as exc:
            raise ValueError("Unable to parse the model's tool arguments.") from exc
        if not isinstance(args, dict):
            raise ValueError("Tool arguments must be a JSON object.")
        return StructuredPrompt.from_wire(args)
    raise RuntimeError(f"No function_call output for '{tool_name}' found in Responses API output.")


def extract_text(response: Any) -> str:
    """Extract the concatenated output text from a Responses API result."""
    text = getattr(response, "output_text", None)
    if text:
        return text
    chunks = []
    for item in getattr(response, "output", None) or []:
        if getattr(item, "type", None) != "message":
            continue
        for content in getattr(item, "content", None) or []:
            if getattr(content, "type", None) == "output_text":
                chunks.append(getattr(content, "text", "") or "")
    return "".join(chunks)


def extract_image_b64(response: Any) -> str:
    """Return the base64 payload of the first image in an Images API result."""
    data = getattr(response, "data", None)
    if not data:
        raise RuntimeError("Empty response from image API.")
    b64_data = getattr(data[0], "b64_json", None)
    if not b64_data:
        raise RuntimeError("No image data in response.")
    return b64_data


def extract_usage(response: Any) -> Dict[str, Optional[int]]:
    """Return token usage information from the response, if present."""
    usage = getattr(response, "usage", None)
    return {
        "input_tokens": getattr(usage, "input_tokens", None) if usage else None,
        "output_tokens": getattr(usage, "output_tokens", None) if usage else None,
    }
