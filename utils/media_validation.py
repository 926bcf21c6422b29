"""Validation helpers for uploaded image content."""

import base64
import io

from fastapi import HTTPException, UploadFile
from PIL import Image, UnidentifiedImageError

# Pillow format name -> MIME type accepted by the image models.
ALLOWED_IMAGE_FORMATS = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "WEBP": "image/webp",
    "GIF": "image/gif",
}


def detect_image_mime(raw: bytes) -> str:
    """Return the MIME type of raw image bytes, raising ValueError when unsupported."""
    if not raw:
        raise ValueError("Image content is empty.")
    try:
        with Image.open(io.BytesIO(raw)) as img:
            img.verify()
            image_format = img.format
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        raise ValueError("Uploaded bytes are not a supported image format.") from exc
    mime_type = ALLOWED_IMAGE_FORMATS.get(image_format or "")
    if mime_type is None:
        raise ValueError(f"Unsupported image format: {image_format}")
    return mime_type


# Formats the image edit endpoint accepts as-is; anything else is re-encoded as PNG.
EDITABLE_MIME_TYPES = {"image/jpeg", "image/png", "image/webp"}


def as_editable_image(filename: str, raw: bytes, mime_type: str) -> tuple[str, bytes, str]:
    """Return a (filename, bytes, mime) upload tuple the image edit endpoint accepts."""
    if mime_type in EDITABLE_MIME_TYPES:
        return filename, raw, mime_type
    with Image.open(io.BytesIO(raw)) as img:
        img.seek(0)
        converted = img.convert("RGBA")
    buffer = io.BytesIO()
    converted.save(buffer, format="PNG")
    stem = filename.rsplit(".", 1)[0] if "." in filename else filename
    return f"{stem}.png", buffer.getvalue(), "image/png"


def to_data_url(raw: bytes, mime_type: str) -> str:
    """Encode raw bytes as a base64 data URL."""
    encoded = base64.b64encode(raw).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def validate_image_file(image_file: UploadFile) -> None:
    """Reject uploads whose declared content type is clearly not an image.

    Browsers sometimes omit the content type for drag-and-drop uploads, so a
    missing type is allowed through and the bytes are sniffed afterwards.
    """
    if image_file.content_type:
        content_type = image_file.content_type.lower().split(";", 1)[0].strip()
        if content_type != "application/octet-stream" and not content_type.startswith("image/"):
            raise HTTPException(status_code=415, detail=f"Unsupported content type: {image_file.content_type}")


async def read_image_bytes(image_file: UploadFile) -> tuple[bytes, str]:
    """Read a validated image upload and return its bytes and sniffed MIME type."""
    validate_image_file(image_file)
    raw = await image_file.read()
    if not raw:
        raise HTTPException(status_code=400, detail="Uploaded image is empty.")
    try:
        mime_type = detect_image_mime(raw)
    except ValueError as exc:
        raise HTTPException(status_code=415, detail=str(exc)) from exc
    return raw, mime_type
