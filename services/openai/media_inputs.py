"""Utilities to build input payloads for the Responses API."""

from typing import Any, Dict, List, Optional

from models.session_models import ChatTurn


def text_message(role: str, text: str) -> Dict[str, Any]:
    """Wrap text as a single Responses API message."""
    content_type = "output_text" if role == "assistant" else "input_text"
    return {"type": "message", "role": role, "content": [{"type": content_type, "text": text}]}


def build_inputs(
    system_prompt: str,
    user_prompt: str,
    *,
    image_url: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Build the input array with the optional image as its own user entry."""
    inputs: List[Dict[str, Any]] = [
        text_message("system", system_prompt),
        text_message("user", user_prompt),
    ]
    if image_url:
        inputs.append(
            {"type": "message", "role": "user", "content": [{"type": "input_image", "image_url": image_url}]}
        )
    return inputs


def build_chat_inputs(instructions: str, turns: List[ChatTurn], text: str) -> List[Dict[str, Any]]:
    """Replay the retained conversation followed by the new user text."""
    inputs: List[Dict[str, Any]] = [text_message("system", instructions)]
    inputs.extend(text_message(turn.role, turn.content) for turn in turns)
    inputs.append(text_message("user", text))
    return inputs
