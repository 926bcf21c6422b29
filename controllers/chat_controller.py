"""Chat lifecycle helpers for the assistant panel."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import HTTPException, Request

from controllers.dependencies import get_store
from services.chat_flow import ChatBusyError


async def start_chat(request: Request) -> Dict[str, Any]:
	"""Create a new chat and return its id with the greeting transcript."""
	chat = get_store(request).create_chat()
	return chat.snapshot()


async def get_chat(request: Request, chat_id: str) -> Dict[str, Any]:
	try:
		chat = get_store(request).get_chat(chat_id)
	except KeyError as exc:
		raise HTTPException(status_code=404, detail="Chat not found") from exc
	return chat.snapshot()


async def send_message(request: Request, chat_id: str, text: str) -> Dict[str, Any]:
	"""Run one turn and return the updated transcript."""
	try:
		chat = get_store(request).get_chat(chat_id)
	except KeyError as exc:
		raise HTTPException(status_code=404, detail="Chat not found") from exc
	try:
		await chat.submit(text)
	except ChatBusyError as exc:
		raise HTTPException(status_code=409, detail=str(exc)) from exc
	except ValueError as exc:
		raise HTTPException(status_code=400, detail=str(exc)) from exc
	return chat.snapshot()


async def end_chat(request: Request, chat_id: str) -> Dict[str, Any]:
	try:
		get_store(request).remove_chat(chat_id)
	except KeyError as exc:
		raise HTTPException(status_code=404, detail="Chat not found") from exc
	return {"chat_id": chat_id, "closed": True}
