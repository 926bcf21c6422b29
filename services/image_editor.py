"""Apply free-text AI edits to an uploaded image."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from models.prompt_models import FlowStatus
from models.session_models import EDITED_IMAGE_FILENAME, ImageResult, UploadedImage
from services.openai.gateway import AIGateway

LOGGER = logging.getLogger(__name__)

EDIT_ERROR = "Failed to edit image. The model might not support this edit."


class ImageEditFlow:
    """Single-instruction image edits; each call replaces the previous result."""

    def __init__(self, gateway: AIGateway, image: UploadedImage) -> None:
        self.gateway = gateway
        self.image = image
        self.status = FlowStatus.IDLE
        self.instruction: Optional[str] = None
        self.edited_image: Optional[ImageResult] = None
        self.error: Optional[str] = None

    async def apply(self, instruction: str) -> Optional[ImageResult]:
        """Edit the original upload with ``instruction``; earlier edits are not chained."""
        if not instruction or not instruction.strip():
            raise ValueError("Edit instruction is required.")
        self.instruction = instruction
        self.status = FlowStatus.PENDING
        self.error = None
        self.edited_image = None
        try:
            data_url = await self.gateway.edit_image(self.image, instruction)
        except Exception:
            LOGGER.exception("Image edit failed for upload %s", self.image.upload_id)
            self.status = FlowStatus.ERROR
            self.error = EDIT_ERROR
            return None
        self.edited_image = ImageResult(data_url=data_url, filename=EDITED_IMAGE_FILENAME)
        self.status = FlowStatus.SUCCESS
        return self.edited_image

    def snapshot(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "instruction": self.instruction,
            "editedImage": self.edited_image.to_dict() if self.edited_image else None,
            "error": self.error,
        }
