"""Gateway to OpenAI for prompt analysis, image generation, image edits and chat."""

import logging
import time
from typing import Any, Dict, List

from openai import AsyncOpenAI

from models.prompt_models import StructuredPrompt
from models.session_models import ChatSession, ChatTurn, UploadedImage
from services.openai.media_inputs import build_chat_inputs, build_inputs
from services.openai.prompt_schema import ANALYSIS_FUNCTION, BREAKDOWN_FUNCTION, FUNCTION_NAME
from services.openai.prompts import (
    analysis_system_prompt,
    analysis_user_prompt,
    breakdown_system_prompt,
    breakdown_user_prompt,
    chat_system_prompt,
)
from services.openai.response_parser import extract_image_b64, extract_text, extract_usage, parse_prompt_call
from utils.media_validation import as_editable_image
from utils.settings import Settings

LOGGER = logging.getLogger(__name__)

GENERATED_MIME_TYPE = "image/jpeg"
EDITED_MIME_TYPE = "image/png"


class AIGateway:
    """Stateless wrappers around the OpenAI calls the flows depend on.

    Every method is a single request; failures propagate to the caller
    without retry.
    """

    def __init__(self, client: AsyncOpenAI, settings: Settings) -> None:
        """Initialize the gateway with a shared OpenAI async client."""
        if client is None:
            raise ValueError("OpenAI client must be provided.")
        self.client = client
        self.settings = settings

    async def analyze_image(self, image: UploadedImage) -> StructuredPrompt:
        """Describe an uploaded image as a structured text-to-image prompt."""
        inputs = build_inputs(analysis_system_prompt(), analysis_user_prompt(), image_url=image.data_url)
        start_time = time.time()
        response = await self._create_response(inputs, tools=[ANALYSIS_FUNCTION])
        prompt = self._parse_prompt(response)
        LOGGER.info(
            "Image %s analyzed in %.2fs (usage=%s)", image.upload_id, time.time() - start_time, extract_usage(response)
        )
        return prompt

    async def reanalyze_text(self, prompt: str) -> StructuredPrompt:
        """Break user-edited prompt text back into its components.

        The returned ``full_prompt`` is always the submitted text, whatever
        the model echoed.
        """
        inputs = build_inputs(breakdown_system_prompt(), breakdown_user_prompt(prompt))
        response = await self._create_response(inputs, tools=[BREAKDOWN_FUNCTION])
        parsed = self._parse_prompt(response)
        return parsed.with_value("fullPrompt", prompt)

    async def generate_image(self, prompt: str) -> str:
        """Generate one square JPEG from a prompt and return it as a data URL."""
        try:
            response = await self.client.images.generate(
                model=self.settings.image_model,
                prompt=prompt,
                n=1,
                size="1024x1024",
                output_format="jpeg",
            )
        except Exception as exc:
            logging.error("Error during OpenAI image generation: %s", exc)
            raise
        return f"data:{GENERATED_MIME_TYPE};base64,{extract_image_b64(response)}"

    async def edit_image(self, image: UploadedImage, instruction: str) -> str:
        """Apply a free-text edit to the uploaded image and return a PNG data URL."""
        try:
            response = await self.client.images.edit(
                model=self.settings.edit_model,
                image=as_editable_image(image.filename, image.raw, image.mime_type),
                prompt=instruction,
            )
        except Exception as exc:
            logging.error("Error during OpenAI image edit: %s", exc)
            raise
        return f"data:{EDITED_MIME_TYPE};base64,{extract_image_b64(response)}"

    def create_chat_session(self) -> ChatSession:
        """Return a new conversation handle; no request is made until the first turn."""
        return ChatSession(model=self.settings.chat_model, instructions=chat_system_prompt())

    async def send_turn(self, session: ChatSession, text: str) -> str:
        """Send one user message with the retained history and return the reply text."""
        inputs = build_chat_inputs(session.instructions, session.turns, text)
        try:
            response = await self.client.responses.create(model=session.model, input=inputs)
        except Exception as exc:
            logging.error("Error during OpenAI chat turn: %s", exc)
            raise
        reply = extract_text(response)
        if not reply:
            raise RuntimeError("Chat response did not include text.")
        session.turns.append(ChatTurn(role="user", content=text))
        session.turns.append(ChatTurn(role="assistant", content=reply))
        return reply

    async def _create_response(self, inputs: List[Dict[str, Any]], *, tools: List[Dict[str, Any]]) -> Any:
        """Send a structured-output request to the Responses API."""
        try:
            return await self.client.responses.create(
                model=self.settings.prompt_model,
                input=inputs,
                tools=tools,
                tool_choice={"type": "function", "name": FUNCTION_NAME},
            )
        except Exception as exc:
            logging.error("Error during OpenAI Responses API call: %s", exc)
            raise

    def _parse_prompt(self, response: Any) -> StructuredPrompt:
        """Parse the prompt breakdown from the model output."""
        try:
            return parse_prompt_call(response, tool_name=FUNCTION_NAME)
        except Exception as exc:
            logging.error("Error parsing OpenAI response: %s", exc)
            logging.error("Full response object: %r", response)
            raise
