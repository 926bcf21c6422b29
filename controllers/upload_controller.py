from fastapi import Request, UploadFile, HTTPException
from typing import Dict, Any

from controllers.dependencies import get_store
from utils.media_validation import read_image_bytes


async def create_upload(request: Request, file: UploadFile) -> Dict[str, Any]:
    """Validate an uploaded image and register it in the workspace.

    Args:
        request: FastAPI Request object (used to access app.state for the store).
        file: Uploaded image file; its bytes are sniffed with Pillow.

    Returns:
        A dict containing: upload_id, filename, mime_type, data_url
    """
    raw, mime_type = await read_image_bytes(file)
    image = get_store(request).add_upload(file.filename or "uploaded_image", mime_type, raw)
    return image.describe()


async def get_upload(request: Request, upload_id: str) -> Dict[str, Any]:
    try:
        image = get_store(request).get_upload(upload_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Upload not found") from exc
    return image.describe()


async def delete_upload(request: Request, upload_id: str) -> Dict[str, Any]:
    """Clear an upload and any edit state tied to it."""
    try:
        get_store(request).remove_upload(upload_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Upload not found") from exc
    return {"upload_id": upload_id, "deleted": True}
