"""Stateless prompt analysis and image generation endpoints."""

import logging
from typing import Any, Dict

from fastapi import HTTPException, Request, UploadFile

from controllers.dependencies import get_gateway
from models.session_models import GENERATED_IMAGE_FILENAME, ImageResult, UploadedImage
from services.prompt_sync import ANALYSIS_ERROR, GENERATION_ERROR, REANALYSIS_ERROR
from utils.media_validation import read_image_bytes, to_data_url

LOGGER = logging.getLogger(__name__)


async def analyze_upload(request: Request, file: UploadFile) -> Dict[str, Any]:
    """Return the structured prompt for an image without storing it."""
    raw, mime_type = await read_image_bytes(file)
    image = UploadedImage(
        upload_id="adhoc",
        filename=file.filename or "uploaded_image",
        mime_type=mime_type,
        raw=raw,
        data_url=to_data_url(raw, mime_type),
    )
    try:
        prompt = await get_gateway(request).analyze_image(image)
    except Exception as exc:
        LOGGER.exception("Stateless image analysis failed")
        raise HTTPException(status_code=502, detail=ANALYSIS_ERROR) from exc
    return {"prompt": prompt.to_wire()}


async def breakdown_prompt(request: Request, prompt: str) -> Dict[str, Any]:
    """Split free prompt text into its named components."""
    if not prompt.strip():
        raise HTTPException(status_code=400, detail="Prompt text is required.")
    try:
        parts = await get_gateway(request).reanalyze_text(prompt)
    except Exception as exc:
        LOGGER.exception("Stateless prompt breakdown failed")
        raise HTTPException(status_code=502, detail=REANALYSIS_ERROR) from exc
    return {"prompt": parts.to_wire()}


async def generate_image(request: Request, prompt: str) -> Dict[str, Any]:
    """Generate an image from prompt text."""
    if not prompt.strip():
        raise HTTPException(status_code=400, detail="Prompt text is required.")
    try:
        data_url = await get_gateway(request).generate_image(prompt)
    except Exception as exc:
        LOGGER.exception("Stateless image generation failed")
        raise HTTPException(status_code=502, detail=GENERATION_ERROR) from exc
    return ImageResult(data_url=data_url, filename=GENERATED_IMAGE_FILENAME).to_dict()
