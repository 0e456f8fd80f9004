from app.models.activity import ActivityEntry
from typing import List


class ActivityRepository:
    async def add(self, user_id: str, description: str) -> ActivityEntry:
        return await ActivityEntry.create(user_id=user_id, description=description)

    async def list_recent(self, user_id: str, limit: int = 10) -> List[ActivityEntry]:
        """Последние записи активности, от новых к старым"""
        return await ActivityEntry.filter(user_id=user_id).order_by("-created_at", "-id").limit(limit)
