"""Prompt builders for prompt analysis and the assistant chat."""

def analysis_system_prompt() -> str:
    """Return the system prompt used when describing an uploaded image."""
    return (
        "You are an expert in text-to-image prompt engineering. "
        "Analyze the provided image and generate a detailed, structured prompt suitable for "
        "AI image generators like Midjourney or Imagen. "
        "The 'fullPrompt' should be a complete, coherent sentence combining all elements. "
        "The other fields should break down the prompt into its core components."
    )


def analysis_user_prompt() -> str:
    return "Analyze this image and generate the prompt breakdown."


def breakdown_system_prompt() -> str:
    """Return the system prompt used when re-analyzing user-edited prompt text."""
    return (
        "You are an expert in text-to-image prompt engineering. "
        "Analyze the provided prompt text and break it down into its structured components. "
        "The 'fullPrompt' in your response should be identical to the user's input prompt. "
        "The other fields should break down the prompt into its core components as best as you can. "
        "If a component is not present in the prompt, leave the corresponding field as an empty string."
    )


def breakdown_user_prompt(prompt: str) -> str:
    return f'Analyze this prompt and generate the breakdown: "{prompt}"'


def chat_system_prompt() -> str:
    return (
        "You are a helpful AI assistant for a creative prompt engineering dashboard. "
        "Answer user questions concisely and clearly."
    )
