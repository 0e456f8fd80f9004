import logging
from datetime import datetime, timezone, tzinfo
from typing import Optional

from app.repositories.record_store import RecordStore
from app.services.context_augmenter import to_local
from app.services.generation_client import GenerationClient, GenerationError, GenerationErrorKind
from app.utils.prompt_manager import prompt_manager


logger = logging.getLogger(__name__)

NO_TASKS_SUMMARY = "No tasks for today."
NO_SUMMARY_GENERATED = "No summary generated."
SUMMARY_TEMPERATURE = 0.5
SUMMARY_MAX_TOKENS = 200


class SummaryService:
    """Краткая сводка задач пользователя на сегодня"""

    def __init__(self, store: RecordStore, generator: GenerationClient, tz: tzinfo = None):
        self.store = store
        self.generator = generator
        self.tz = tz or timezone.utc

    async def summarize_today(self, user_id: str, now: Optional[datetime] = None) -> str:
        if not user_id:
            raise ValueError("user_id is required")

        today = (to_local(now, self.tz) if now else datetime.now(self.tz)).date()
        tasks = await self.store.list_tasks_due_on(user_id, today, self.tz)
        if not tasks:
            return NO_TASKS_SUMMARY

        tasks_text = "\n".join(f"- {t.title} [{t.priority.value}]" for t in tasks)
        prompt = prompt_manager.render("task_summary", tasks=tasks_text)

        try:
            return await self.generator.generate(prompt, temperature=SUMMARY_TEMPERATURE, max_tokens=SUMMARY_MAX_TOKENS)
        except GenerationError as e:
            # Недоступность бэкенда - ошибка запроса; любой другой отказ моделей дает пустую сводку
            if e.kind == GenerationErrorKind.CONNECTION:
                raise
            logger.warning(f"Summary: модели не вернули текст для пользователя {user_id}: {e}")
            return NO_SUMMARY_GENERATED
