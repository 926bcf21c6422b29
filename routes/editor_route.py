"""FastAPI routes for free-text image edits."""

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from controllers.editor_controller import apply_edit, get_edit_state

router = APIRouter(prefix="/uploads", tags=["editor"])


class EditPayload(BaseModel):
	instruction: str


@router.post("/{upload_id}/edits")
async def post_edit_route(request: Request, upload_id: str, payload: EditPayload):
	try:
		return await apply_edit(request, upload_id, payload.instruction)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.get("/{upload_id}/edits")
async def get_edit_route(request: Request, upload_id: str):
	try:
		return await get_edit_state(request, upload_id)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))
