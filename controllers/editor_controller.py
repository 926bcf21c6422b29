from fastapi import Request, HTTPException
from typing import Dict, Any

from controllers.dependencies import get_store


async def apply_edit(request: Request, upload_id: str, instruction: str) -> Dict[str, Any]:
    """Run one free-text edit against the original upload.

    Gateway failures are reported in the returned state (status `error`)
    rather than as an HTTP error, mirroring the editor panel.
    """
    try:
        editor = get_store(request).editor_for(upload_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Upload not found") from exc
    try:
        await editor.apply(instruction)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return editor.snapshot()


async def get_edit_state(request: Request, upload_id: str) -> Dict[str, Any]:
    try:
        editor = get_store(request).editor_for(upload_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Upload not found") from exc
    return editor.snapshot()
