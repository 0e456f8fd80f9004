"""
Шлюз к хранилищу записей пользователя.
Отдает pydantic-записи вместо ORM-объектов, чтобы дальнейший конвейер не зависел от Tortoise.
"""
from datetime import date, timezone
from typing import List, Optional

from app.core.config import StoreConfig
from app.repositories.activity_repository import ActivityRepository
from app.repositories.conversation_repository import ConversationRepository
from app.repositories.task_repository import TaskRepository
from app.repositories.user_repository import ProfileRepository, StatisticsRepository
from app.schemas.context import (
    ActivityRecord,
    ConversationRecord,
    ProfileRecord,
    StatisticsRecord,
    TaskRecord,
)


class RecordStore:
    def __init__(self, config: StoreConfig = None):
        self.config = config or StoreConfig()
        self.profiles = ProfileRepository()
        self.tasks = TaskRepository()
        self.statistics = StatisticsRepository()
        self.activity = ActivityRepository()
        self.conversations = ConversationRepository()

    async def get_profile(self, user_id: str) -> Optional[ProfileRecord]:
        profile = await self.profiles.get(user_id)
        return ProfileRecord.model_validate(profile) if profile else None

    async def list_tasks(self, user_id: str) -> List[TaskRecord]:
        return [TaskRecord.model_validate(t) for t in await self.tasks.list_for_user(user_id)]

    async def list_tasks_due_on(self, user_id: str, day: date, tz=timezone.utc) -> List[TaskRecord]:
        return [TaskRecord.model_validate(t) for t in await self.tasks.list_due_on(user_id, day, tz)]

    async def get_statistics(self, user_id: str) -> Optional[StatisticsRecord]:
        stats = await self.statistics.get(user_id)
        return StatisticsRecord.model_validate(stats) if stats else None

    async def list_recent_activity(self, user_id: str) -> List[ActivityRecord]:
        entries = await self.activity.list_recent(user_id, limit=self.config.activity_limit)
        return [ActivityRecord.model_validate(e) for e in entries]

    async def list_recent_history(self, user_id: str) -> List[ConversationRecord]:
        turns = await self.conversations.list_recent(user_id, limit=self.config.history_limit)
        return [ConversationRecord.model_validate(t) for t in turns]

    async def append_conversation_turn(self, user_id: str, message: str, response: str) -> ConversationRecord:
        turn = await self.conversations.add(user_id, message, response)
        return ConversationRecord.model_validate(turn)
