"""Session domain models for uploads, chat and image results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

GENERATED_IMAGE_FILENAME = "generated-image.jpg"
EDITED_IMAGE_FILENAME = "edited-image.png"


@dataclass(frozen=True)
class UploadedImage:
	"""An image supplied by the user, shared read-only with every flow."""

	upload_id: str
	filename: str
	mime_type: str
	raw: bytes = field(repr=False)
	data_url: str = field(repr=False)

	def describe(self) -> Dict[str, Any]:
		return {
			"upload_id": self.upload_id,
			"filename": self.filename,
			"mime_type": self.mime_type,
			"data_url": self.data_url,
		}


@dataclass(frozen=True)
class ChatMessage:
	"""One transcript entry; role is either 'user' or 'model'."""

	role: str
	text: str

	def to_dict(self) -> Dict[str, str]:
		return {"role": self.role, "text": self.text}


@dataclass
class ChatTurn:
	"""A message exchanged with the model, kept for conversational context."""

	role: str
	content: str


@dataclass
class ChatSession:
	"""Gateway-side conversation handle retained across turns."""

	model: str
	instructions: str
	turns: List[ChatTurn] = field(default_factory=list)


@dataclass
class ImageResult:
	"""A generated or edited image encoded as a data URL."""

	data_url: str
	filename: str

	def to_dict(self) -> Dict[str, str]:
		return {"image": self.data_url, "filename": self.filename}
