"""
Обработка одного хода чата: извлечение контекста, сборка промпта, генерация ответа
и фоновое сохранение обмена в историю.
"""
import asyncio
import logging
from datetime import datetime, timezone, tzinfo
from typing import NamedTuple, Optional, Set

from app.repositories.record_store import RecordStore
from app.services.context_augmenter import augment_context
from app.services.context_retriever import ContextRetriever
from app.services.generation_client import GenerationClient, GenerationError
from app.services.prompt_builder import build_prompt


logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "I'm having trouble right now. Please try again in a moment."


class ChatInputError(ValueError):
    """Не передано сообщение или ID пользователя"""


class ChatReply(NamedTuple):
    text: str
    ok: bool


class ChatService:
    def __init__(self, retriever: ContextRetriever, generator: GenerationClient, store: RecordStore, tz: tzinfo = None):
        self.retriever = retriever
        self.generator = generator
        self.store = store
        self.tz = tz or timezone.utc
        self._background: Set[asyncio.Task] = set()

    async def handle_chat_turn(self, message: Optional[str], user_id: Optional[str], now: Optional[datetime] = None) -> ChatReply:
        """
        Отвечает на сообщение пользователя с учетом его данных.

        Args:
            message: текст сообщения
            user_id: ID пользователя
            now: текущее время (для тестов)

        Returns:
            ChatReply: текст ответа и признак успеха; при сбое конвейера
            возвращается FALLBACK_MESSAGE с ok=False

        Raises:
            ChatInputError: пустое сообщение или ID пользователя
        """
        if not message or not message.strip() or not user_id or not user_id.strip():
            raise ChatInputError("Message and userId are required")

        logger.info(f"Chat: сообщение от пользователя {user_id}: '{message[:100]}'")

        try:
            retrieved = await self.retriever.retrieve(user_id)
            augmented = augment_context(retrieved, now=now, tz=self.tz)
            prompt = build_prompt(message, augmented)
            response_text = await self.generator.generate(prompt)
        except GenerationError as e:
            logger.error(f"Chat: генерация не удалась для пользователя {user_id}: {e}")
            return ChatReply(FALLBACK_MESSAGE, False)
        except Exception as e:
            logger.exception(f"Chat: ошибка обработки сообщения пользователя {user_id}: {e}")
            return ChatReply(FALLBACK_MESSAGE, False)

        self.save_turn_in_background(user_id, message, response_text)
        return ChatReply(response_text, True)

    def save_turn_in_background(self, user_id: str, message: str, response: str) -> asyncio.Task:
        """Запускает запись в историю без ожидания; результат только логируется"""
        task = asyncio.create_task(self.store.append_conversation_turn(user_id, message, response))
        self._background.add(task)
        task.add_done_callback(self._on_saved)
        return task

    def _on_saved(self, task: asyncio.Task) -> None:
        self._background.discard(task)
        if task.cancelled():
            logger.warning("Chat: запись истории отменена")
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Chat: не удалось сохранить историю диалога: {error!r}")
        else:
            logger.debug("Chat: история диалога сохранена")

    async def drain(self) -> None:
        """Дожидается незавершенных фоновых записей (при остановке приложения и в тестах)"""
        if self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)
