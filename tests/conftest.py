"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import io
from typing import List, Set

import pytest
from PIL import Image

from models.prompt_models import StructuredPrompt
from models.session_models import ChatSession, ChatTurn, UploadedImage
from utils.media_validation import to_data_url
from utils.settings import Settings

ANALYZED_PROMPT = StructuredPrompt(
    scene="a cat",
    background="a sunny windowsill",
    image_type="photograph",
    style="photorealistic",
    texture="soft fur",
    lighting="warm morning light",
    details="",
    full_prompt="a cat, a sunny windowsill, photograph, photorealistic, soft fur, warm morning light",
)


class FakeGateway:
    """In-memory stand-in for the AI gateway that records every call."""

    def __init__(self) -> None:
        self.analysis_result = ANALYZED_PROMPT
        self.echo = "text the model rewrote"
        self.failing: Set[str] = set()
        self.analyze_calls: List[str] = []
        self.reanalyze_calls: List[str] = []
        self.generate_calls: List[str] = []
        self.edit_calls: List[str] = []
        self.turns: List[str] = []

    def _maybe_fail(self, operation: str) -> None:
        if operation in self.failing:
            raise RuntimeError(f"{operation} unavailable")

    async def analyze_image(self, image: UploadedImage) -> StructuredPrompt:
        self.analyze_calls.append(image.upload_id)
        self._maybe_fail("analyze")
        return self.analysis_result

    async def reanalyze_text(self, prompt: str) -> StructuredPrompt:
        self.reanalyze_calls.append(prompt)
        self._maybe_fail("reanalyze")
        return StructuredPrompt(scene=f"parsed {prompt}", style="sketch", full_prompt=self.echo)

    async def generate_image(self, prompt: str) -> str:
        self.generate_calls.append(prompt)
        self._maybe_fail("generate")
        return "data:image/jpeg;base64,R0VO"

    async def edit_image(self, image: UploadedImage, instruction: str) -> str:
        self.edit_calls.append(instruction)
        self._maybe_fail("edit")
        return "data:image/png;base64,RURJVA=="

    def create_chat_session(self) -> ChatSession:
        return ChatSession(model="fake-chat", instructions="be helpful")

    async def send_turn(self, session: ChatSession, text: str) -> str:
        self.turns.append(text)
        self._maybe_fail("chat")
        reply = f"reply {len(session.turns) // 2 + 1}: {text}"
        session.turns.append(ChatTurn(role="user", content=text))
        session.turns.append(ChatTurn(role="assistant", content=reply))
        return reply


def make_png_bytes(size=(8, 8), color=(200, 40, 40)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def png_bytes() -> bytes:
    return make_png_bytes()


@pytest.fixture
def uploaded_image(png_bytes: bytes) -> UploadedImage:
    return UploadedImage(
        upload_id="upload-1",
        filename="cat.png",
        mime_type="image/png",
        raw=png_bytes,
        data_url=to_data_url(png_bytes, "image/png"),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        openai_api_key="test-key",
        prompt_model="prompt-model",
        chat_model="chat-model",
        image_model="image-model",
        edit_model="edit-model",
        debounce_seconds=0.02,
        log_level="INFO",
    )
