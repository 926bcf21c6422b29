"""Turn-based chat with the creative assistant."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from models.session_models import ChatMessage
from services.openai.gateway import AIGateway

LOGGER = logging.getLogger(__name__)

GREETING = "Hello! How can I help you with your creative process today?"
CHAT_ERROR_REPLY = "Sorry, I encountered an error. Please try again."


class ChatBusyError(RuntimeError):
    """Raised when a message is submitted while a turn is still outstanding."""


class ChatFlow:
    """Own one assistant session and its transcript."""

    def __init__(self, chat_id: str, gateway: AIGateway) -> None:
        self.chat_id = chat_id
        self.gateway = gateway
        self.session = gateway.create_chat_session()
        self.messages: List[ChatMessage] = [ChatMessage(role="model", text=GREETING)]
        self.pending = False

    async def submit(self, text: str) -> ChatMessage:
        """Append the user message, run one turn and append the model's reply.

        Gateway failures become a model message carrying a fixed apology
        rather than an exception.
        """
        if not text or not text.strip():
            raise ValueError("Message text is required.")
        if self.pending:
            raise ChatBusyError("A reply is still pending; wait for it before sending another message.")

        self.messages.append(ChatMessage(role="user", text=text))
        self.pending = True
        try:
            reply_text = await self.gateway.send_turn(self.session, text)
        except Exception:
            LOGGER.exception("Chat turn failed for chat %s", self.chat_id)
            reply_text = CHAT_ERROR_REPLY
        finally:
            self.pending = False
        reply = ChatMessage(role="model", text=reply_text)
        self.messages.append(reply)
        return reply

    def transcript(self) -> List[Dict[str, str]]:
        return [message.to_dict() for message in self.messages]

    def snapshot(self) -> Dict[str, Any]:
        return {"chat_id": self.chat_id, "pending": self.pending, "messages": self.transcript()}
