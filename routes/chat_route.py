"""FastAPI routes for assistant chat sessions."""

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from controllers.chat_controller import end_chat, get_chat, send_message, start_chat

router = APIRouter(prefix="/chats")


class MessagePayload(BaseModel):
	text: str


@router.post("")
async def start_chat_route(request: Request):
	try:
		return await start_chat(request)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.get("/{chat_id}")
async def get_chat_route(request: Request, chat_id: str):
	try:
		return await get_chat(request, chat_id)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.post("/{chat_id}/messages")
async def post_message_route(request: Request, chat_id: str, payload: MessagePayload):
	try:
		return await send_message(request, chat_id, payload.text)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.delete("/{chat_id}")
async def end_chat_route(request: Request, chat_id: str):
	try:
		return await end_chat(request, chat_id)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))
