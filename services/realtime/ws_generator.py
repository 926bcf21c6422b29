"""Dispatch prompt-editor websocket events to a PromptSyncController."""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Coroutine, Dict, Set

from fastapi import WebSocket

from models.session_models import UploadedImage
from services.openai.gateway import AIGateway
from services.prompt_sync import PromptSyncController

LOGGER = logging.getLogger(__name__)


class GeneratorSessionHandler:
	"""Route websocket messages for one prompt-editor session."""

	def __init__(self, websocket: WebSocket, gateway: AIGateway, image: UploadedImage, debounce_seconds: float) -> None:
		self.websocket = websocket
		self.controller = PromptSyncController(
			gateway,
			image,
			debounce_seconds=debounce_seconds,
			on_change=self._publish_state,
		)
		self._tasks: Set[asyncio.Task] = set()

	def start(self) -> None:
		"""Kick off the initial analysis without blocking the receive loop."""
		self._spawn(self.controller.start())

	async def handle(self, payload: Dict[str, Any]) -> None:
		"""Process a single inbound websocket payload."""
		request_id = payload.get("request_id")
		message_type = payload.get("type")
		try:
			if message_type == "prompt.field":
				field = payload.get("field")
				if not isinstance(field, str):
					raise ValueError("Field name is required.")
				await self.controller.edit_field(field, self._text(payload))
			elif message_type == "prompt.full":
				await self.controller.edit_full_prompt(self._text(payload))
			elif message_type == "image.generate":
				self._spawn(self.controller.generate_image())
			elif message_type == "state.get":
				await self._send({"type": "prompt.state", "request_id": request_id, **self.controller.snapshot()})
			else:
				raise ValueError("Unsupported message type.")
		except Exception as exc:
			LOGGER.warning("Rejected prompt-editor frame %r: %s", message_type, exc)
			await self._send_error(request_id, str(exc))

	def close(self) -> None:
		"""Tear down the controller; in-flight model calls finish unobserved."""
		self.controller.close()

	@staticmethod
	def _text(payload: Dict[str, Any]) -> str:
		value = payload.get("value")
		if value is None:
			return ""
		if not isinstance(value, str):
			raise ValueError("Field value must be a string.")
		return value

	def _spawn(self, coro: Coroutine[Any, Any, Any]) -> None:
		task = asyncio.get_running_loop().create_task(coro)
		self._tasks.add(task)
		task.add_done_callback(self._tasks.discard)

	async def _publish_state(self, snapshot: Dict[str, Any]) -> None:
		await self._send({"type": "prompt.state", **snapshot})

	async def _send_error(self, request_id: Any, detail: str) -> None:
		await self._send({"type": "error", "request_id": request_id, "detail": detail})

	async def _send(self, payload: Dict[str, Any]) -> None:
		await self.websocket.send_text(json.dumps(payload))
