from app.models.profile import UserProfile
from app.models.statistics import UserStatistics
from typing import Optional


class ProfileRepository:
    async def get(self, user_id: str) -> Optional[UserProfile]:
        return await UserProfile.filter(user_id=user_id).first()

    async def create(self, user_id: str, full_name: Optional[str] = None) -> UserProfile:
        return await UserProfile.create(user_id=user_id, full_name=full_name)


class StatisticsRepository:
    async def get(self, user_id: str) -> Optional[UserStatistics]:
        return await UserStatistics.filter(user_id=user_id).first()

    async def create(self, user_id: str, *, current_streak_days: int = 0, tasks_completed_total: int = 0) -> UserStatistics:
        return await UserStatistics.create(
            user_id=user_id,
            current_streak_days=current_streak_days,
            tasks_completed_total=tasks_completed_total,
        )
