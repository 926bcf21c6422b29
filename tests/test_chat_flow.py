from __future__ import annotations

import asyncio

import pytest

from services.chat_flow import CHAT_ERROR_REPLY, GREETING, ChatBusyError, ChatFlow


@pytest.fixture
def chat(fake_gateway) -> ChatFlow:
    return ChatFlow("chat-1", fake_gateway)


def test_seeded_with_greeting_only(chat, fake_gateway) -> None:
    assert chat.transcript() == [{"role": "model", "text": GREETING}]
    assert fake_gateway.turns == []
    assert chat.session.turns == []


@pytest.mark.asyncio
async def test_transcript_order_after_n_turns(chat) -> None:
    questions = ["what is a prompt?", "how about lighting?", "thanks"]
    for question in questions:
        await chat.submit(question)

    messages = chat.transcript()
    assert len(messages) == 2 * len(questions) + 1
    assert [m["role"] for m in messages] == ["model"] + ["user", "model"] * len(questions)
    assert [m["text"] for m in messages[1::2]] == questions
    assert messages[2]["text"].startswith("reply 1:")
    assert messages[6]["text"].startswith("reply 3:")


@pytest.mark.asyncio
async def test_session_keeps_context_across_turns(chat) -> None:
    await chat.submit("one")
    await chat.submit("two")
    assert [turn.content for turn in chat.session.turns if turn.role == "user"] == ["one", "two"]


@pytest.mark.asyncio
async def test_failure_becomes_model_message(chat, fake_gateway) -> None:
    fake_gateway.failing.add("chat")
    reply = await chat.submit("hello?")
    assert reply.role == "model"
    assert reply.text == CHAT_ERROR_REPLY
    assert chat.pending is False
    assert len(chat.messages) == 3


@pytest.mark.asyncio
async def test_submit_while_pending_is_rejected(chat, fake_gateway) -> None:
    release = asyncio.Event()

    async def slow_turn(session, text):
        await release.wait()
        return "done"

    fake_gateway.send_turn = slow_turn
    first = asyncio.create_task(chat.submit("first"))
    await asyncio.sleep(0)
    assert chat.pending is True
    with pytest.raises(ChatBusyError):
        await chat.submit("second")
    release.set()
    await first
    assert [m.text for m in chat.messages] == [GREETING, "first", "done"]


@pytest.mark.asyncio
async def test_blank_message_rejected(chat) -> None:
    with pytest.raises(ValueError):
        await chat.submit("  ")
    assert len(chat.messages) == 1
