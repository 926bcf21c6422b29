from fastapi import APIRouter, File, HTTPException, Request, UploadFile
from pydantic import BaseModel

from controllers.prompt_controller import analyze_upload, breakdown_prompt, generate_image

router = APIRouter(tags=["prompts"])


class PromptRequest(BaseModel):
    prompt: str


@router.post("/prompts/analyze")
async def post_analyze(request: Request, file: UploadFile = File(...)):
    """Describe an uploaded image as a structured prompt."""
    try:
        result = await analyze_upload(request, file)
    except HTTPException:
        raise
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc))
    return result


@router.post("/prompts/breakdown")
async def post_breakdown(request: Request, payload: PromptRequest):
    """Break free prompt text into its named components."""
    try:
        result = await breakdown_prompt(request, payload.prompt)
    except HTTPException:
        raise
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc))
    return result


@router.post("/images/generate")
async def post_generate(request: Request, payload: PromptRequest):
    """Generate a new image from prompt text."""
    try:
        result = await generate_image(request, payload.prompt)
    except HTTPException:
        raise
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc))
    return result
