"""WebSocket endpoint for the live prompt editor."""

from __future__ import annotations

import json

from fastapi import APIRouter, Depends, HTTPException, WebSocket
from starlette.websockets import WebSocketDisconnect

from services.realtime.ws_generator import GeneratorSessionHandler
from services.workspace_store import WorkspaceStore

router = APIRouter()


def _require_workspace_store(websocket: WebSocket) -> WorkspaceStore:
	store = getattr(websocket.app.state, "workspace_store", None)
	if store is None:
		raise HTTPException(status_code=500, detail="Workspace store unavailable")
	return store


@router.websocket("/ws/generator/{upload_id}")
async def generator_socket(
	websocket: WebSocket, upload_id: str, store: WorkspaceStore = Depends(_require_workspace_store)
):
	"""Analyze an upload and keep its prompt breakdown in sync with user edits."""
	await websocket.accept()
	try:
		image = store.get_upload(upload_id)
	except KeyError:
		await websocket.send_text(json.dumps({"type": "error", "detail": "Upload not found"}))
		await websocket.close()
		return

	settings = websocket.app.state.settings
	handler = GeneratorSessionHandler(websocket, websocket.app.state.gateway, image, settings.debounce_seconds)
	handler.start()
	try:
		while True:
			try:
				raw = await websocket.receive_text()
			except WebSocketDisconnect:
				break
			try:
				payload = json.loads(raw)
			except json.JSONDecodeError:
				await websocket.send_text(json.dumps({"type": "error", "detail": "Payload must be JSON"}))
				continue
			if not isinstance(payload, dict):
				await websocket.send_text(json.dumps({"type": "error", "detail": "Payload must be a JSON object"}))
				continue
			await handler.handle(payload)
	finally:
		handler.close()
