import asyncio
import logging

from app.repositories.record_store import RecordStore
from app.schemas.context import RetrievedContext, StatisticsRecord


logger = logging.getLogger(__name__)


class ContextRetriever:
    """Собирает данные пользователя для одного хода чата"""

    def __init__(self, store: RecordStore):
        self.store = store

    async def retrieve(self, user_id: str) -> RetrievedContext:
        """
        Параллельно читает профиль, задачи, статистику, активность и историю диалога.

        Неудачное или пустое чтение заменяется значением по умолчанию,
        ошибки хранилища наружу не пробрасываются.

        Args:
            user_id: ID пользователя (непустой)

        Returns:
            RetrievedContext
        """
        if not user_id:
            raise ValueError("user_id is required")

        try:
            profile, tasks, statistics, activity, history = await asyncio.gather(
                self.store.get_profile(user_id),
                self.store.list_tasks(user_id),
                self.store.get_statistics(user_id),
                self.store.list_recent_activity(user_id),
                self.store.list_recent_history(user_id),
                return_exceptions=True,
            )
        except Exception as e:
            logger.exception(f"Retriever: не удалось собрать контекст пользователя {user_id}: {e}")
            return RetrievedContext()

        return RetrievedContext(
            profile=self._or_default(user_id, "profile", profile, None),
            tasks=self._or_default(user_id, "tasks", tasks, []),
            statistics=self._or_default(user_id, "statistics", statistics, None) or StatisticsRecord(user_id=user_id),
            activity=self._or_default(user_id, "activity", activity, []),
            history=self._or_default(user_id, "history", history, []),
        )

    @staticmethod
    def _or_default(user_id: str, name: str, result, default):
        if isinstance(result, BaseException):
            logger.warning(f"Retriever: чтение '{name}' для пользователя {user_id} не удалось: {result!r}")
            return default
        if result is None:
            return default
        return result
