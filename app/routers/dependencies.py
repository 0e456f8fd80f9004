from functools import lru_cache
from zoneinfo import ZoneInfo

from app.core.config import get_settings
from app.repositories.record_store import RecordStore
from app.services.chat_service import ChatService
from app.services.context_retriever import ContextRetriever
from app.services.generation_client import GenerationClient
from app.services.summary_service import SummaryService


# Сервисы живут все время работы приложения: ChatService держит ссылки на фоновые записи истории

@lru_cache
def get_record_store() -> RecordStore:
    return RecordStore(get_settings().store_config())


@lru_cache
def get_generation_client() -> GenerationClient:
    return GenerationClient(get_settings().generation_config())


@lru_cache
def get_chat_service() -> ChatService:
    store = get_record_store()
    return ChatService(
        retriever=ContextRetriever(store),
        generator=get_generation_client(),
        store=store,
        tz=ZoneInfo(get_settings().timezone),
    )


@lru_cache
def get_summary_service() -> SummaryService:
    return SummaryService(get_record_store(), get_generation_client(), tz=ZoneInfo(get_settings().timezone))
