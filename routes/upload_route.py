from fastapi import APIRouter, File, HTTPException, Request, UploadFile

from controllers.upload_controller import create_upload, delete_upload, get_upload

router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.post("")
async def post_upload(request: Request, file: UploadFile = File(...)):
	"""Register an uploaded image and return its id and data URL."""
	try:
		return await create_upload(request, file)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.get("/{upload_id}")
async def get_upload_route(request: Request, upload_id: str):
	try:
		return await get_upload(request, upload_id)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.delete("/{upload_id}")
async def delete_upload_route(request: Request, upload_id: str):
	try:
		return await delete_upload(request, upload_id)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))
