"""Schema definitions for the structured prompt breakdown tool."""

from typing import Any, Dict

FUNCTION_NAME = "describe_prompt_breakdown"

_COMPONENT_DESCRIPTIONS: Dict[str, str] = {
    "scene": "The main subject, object, or scene.",
    "background": "The environment or background elements.",
    "imageType": "Type of image (e.g., photograph, illustration, 3D render).",
    "style": "Artistic style (e.g., photorealistic, impressionistic, surreal).",
    "texture": "Visual texture details (e.g., glossy, matte, rough).",
    "lighting": "Description of the lighting (e.g., soft cinematic lighting, dramatic sidelight).",
    "details": "Additional specific details or keywords.",
}

ANALYSIS_FULL_PROMPT = "A complete, ready-to-use prompt combining all elements."
BREAKDOWN_FULL_PROMPT = "The original user-provided prompt. This MUST be identical to the input."


def build_function_definition(full_prompt_description: str) -> Dict[str, Any]:
    """Return a strict function tool whose arguments are the prompt breakdown."""
    properties: Dict[str, Any] = {
        key: {"type": "string", "description": description}
        for key, description in _COMPONENT_DESCRIPTIONS.items()
    }
    properties["fullPrompt"] = {"type": "string", "description": full_prompt_description}
    return {
        "type": "function",
        "name": FUNCTION_NAME,
        "description": "Return the text-to-image prompt broken down into its components.",
        "parameters": {
            "type": "object",
            "properties": properties,
            "required": list(properties),
            "additionalProperties": False,
        },
        "strict": True,
    }


ANALYSIS_FUNCTION = build_function_definition(ANALYSIS_FULL_PROMPT)
BREAKDOWN_FUNCTION = build_function_definition(BREAKDOWN_FULL_PROMPT)
