import asyncio
import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

from app.models.task import TaskPriority
from app.schemas.context import ConversationRecord, RetrievedContext, TaskRecord
from app.services.chat_service import FALLBACK_MESSAGE, ChatInputError, ChatService
from app.services.generation_client import GenerationError, GenerationErrorKind


@pytest.fixture
def store():
    store = MagicMock()
    store.append_conversation_turn = AsyncMock(
        return_value=ConversationRecord(user_id="U", message="m", response="r")
    )
    return store


@pytest.fixture
def retriever():
    retriever = MagicMock()
    retriever.retrieve = AsyncMock(return_value=RetrievedContext())
    return retriever


@pytest.fixture
def generator():
    generator = MagicMock()
    generator.generate = AsyncMock(return_value="Stub reply")
    return generator


@pytest.fixture
def service(retriever, generator, store):
    return ChatService(retriever=retriever, generator=generator, store=store)


class TestChatInput:
    """Отказ до обращения к хранилищу и бэкенду"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("message,user_id", [
        (None, "U"),
        ("", "U"),
        ("   ", "U"),
        ("hello", None),
        ("hello", ""),
        (None, None),
    ])
    async def test_missing_fields_rejected(self, service, retriever, generator, store, message, user_id):
        with pytest.raises(ChatInputError, match="Message and userId are required"):
            await service.handle_chat_turn(message, user_id)

        retriever.retrieve.assert_not_awaited()
        generator.generate.assert_not_awaited()
        store.append_conversation_turn.assert_not_awaited()


class TestChatTurn:
    """Тесты полного хода чата"""

    @pytest.mark.asyncio
    async def test_whats_due_today(self, service, retriever, generator, store):
        now = datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)
        retriever.retrieve.return_value = RetrievedContext(tasks=[
            TaskRecord(
                user_id="U",
                title="Team sync",
                priority=TaskPriority.NORMAL,
                due_at=datetime(2026, 10, 18, 14, 0, tzinfo=timezone.utc),
            )
        ])

        reply = await service.handle_chat_turn("What's due today?", "U", now=now)
        await service.drain()

        assert reply.ok is True
        assert reply.text == "Stub reply"

        prompt = generator.generate.await_args.args[0]
        assert "TODAY'S TASKS:\n- Team sync [Normal]" in prompt
        assert "UPCOMING" not in prompt
        assert "OVERDUE" not in prompt
        assert "USER MESSAGE: What's due today?" in prompt

        retriever.retrieve.assert_awaited_once_with("U")
        store.append_conversation_turn.assert_awaited_once_with("U", "What's due today?", "Stub reply")

    @pytest.mark.asyncio
    async def test_history_is_chronological_in_prompt(self, service, retriever, generator):
        retriever.retrieve.return_value = RetrievedContext(history=[
            ConversationRecord(user_id="U", message="newer", response="r2"),
            ConversationRecord(user_id="U", message="older", response="r1"),
        ])

        await service.handle_chat_turn("again", "U")
        await service.drain()

        prompt = generator.generate.await_args.args[0]
        assert prompt.index("User: older") < prompt.index("User: newer")

    @pytest.mark.asyncio
    async def test_generation_failure_returns_fallback(self, service, generator, store):
        generator.generate.side_effect = GenerationError("All candidate models failed", GenerationErrorKind.RATE_LIMITED)

        reply = await service.handle_chat_turn("hello", "U")

        assert reply.ok is False
        assert reply.text == FALLBACK_MESSAGE
        assert "candidate" not in reply.text
        store.append_conversation_turn.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unexpected_error_returns_fallback(self, service, retriever):
        retriever.retrieve.side_effect = KeyError("surprise")

        reply = await service.handle_chat_turn("hello", "U")

        assert reply == (FALLBACK_MESSAGE, False)

    @pytest.mark.asyncio
    async def test_history_write_failure_does_not_change_reply(self, service, store, caplog):
        store.append_conversation_turn.side_effect = ConnectionError("insert failed")

        reply = await service.handle_chat_turn("hello", "U")
        await service.drain()

        assert reply.ok is True
        assert reply.text == "Stub reply"
        assert "insert failed" in caplog.text

    @pytest.mark.asyncio
    async def test_reply_not_held_by_history_write(self, service, store):
        release = asyncio.Event()

        async def slow_write(user_id, message, response):
            await release.wait()

        store.append_conversation_turn = slow_write

        reply = await service.handle_chat_turn("hello", "U")

        assert reply.text == "Stub reply"
        assert len(service._background) == 1

        release.set()
        await service.drain()
        assert len(service._background) == 0
