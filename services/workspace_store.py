"""Simple in-memory store for uploads, their editor state, and chats."""

from __future__ import annotations

from typing import Dict
from uuid import uuid4

from models.session_models import UploadedImage
from services.chat_flow import ChatFlow
from services.image_editor import ImageEditFlow
from services.openai.gateway import AIGateway
from utils.media_validation import to_data_url


class WorkspaceStore:
	"""Manage uploaded images, per-upload edit flows, and chat sessions.

	Nothing here is persisted; a restart starts from an empty workspace.
	"""

	def __init__(self, gateway: AIGateway) -> None:
		self.gateway = gateway
		self._uploads: Dict[str, UploadedImage] = {}
		self._editors: Dict[str, ImageEditFlow] = {}
		self._chats: Dict[str, ChatFlow] = {}

	def add_upload(self, filename: str, mime_type: str, raw: bytes) -> UploadedImage:
		"""Store a validated image and return its immutable record."""
		upload_id = uuid4().hex
		image = UploadedImage(
			upload_id=upload_id,
			filename=filename or "uploaded_image",
			mime_type=mime_type,
			raw=raw,
			data_url=to_data_url(raw, mime_type),
		)
		self._uploads[upload_id] = image
		return image

	def get_upload(self, upload_id: str) -> UploadedImage:
		"""Return an upload or raise KeyError if missing."""
		image = self._uploads.get(upload_id)
		if image is None:
			raise KeyError(f"Upload {upload_id} not found")
		return image

	def remove_upload(self, upload_id: str) -> None:
		"""Forget an upload together with its edit state."""
		self.get_upload(upload_id)
		del self._uploads[upload_id]
		self._editors.pop(upload_id, None)

	def editor_for(self, upload_id: str) -> ImageEditFlow:
		"""Return the edit flow for an upload, creating it on first use."""
		image = self.get_upload(upload_id)
		editor = self._editors.get(upload_id)
		if editor is None:
			editor = ImageEditFlow(self.gateway, image)
			self._editors[upload_id] = editor
		return editor

	def create_chat(self) -> ChatFlow:
		"""Start a new chat seeded with the greeting."""
		chat_id = uuid4().hex
		chat = ChatFlow(chat_id, self.gateway)
		self._chats[chat_id] = chat
		return chat

	def get_chat(self, chat_id: str) -> ChatFlow:
		"""Return a chat or raise KeyError if missing."""
		chat = self._chats.get(chat_id)
		if chat is None:
			raise KeyError(f"Chat {chat_id} not found")
		return chat

	def remove_chat(self, chat_id: str) -> None:
		self.get_chat(chat_id)
		del self._chats[chat_id]
