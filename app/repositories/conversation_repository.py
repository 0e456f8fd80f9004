from app.models.conversation import ConversationTurn
from typing import List


class ConversationRepository:
    async def add(self, user_id: str, message: str, response: str) -> ConversationTurn:
        return await ConversationTurn.create(user_id=user_id, message=message, response=response)

    async def list_recent(self, user_id: str, limit: int = 5) -> List[ConversationTurn]:
        """Последние обмены репликами, от новых к старым"""
        return await ConversationTurn.filter(user_id=user_id).order_by("-created_at", "-id").limit(limit)
