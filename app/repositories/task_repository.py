from app.models.task import Task, TaskPriority
from typing import List
from datetime import date, datetime, time, timedelta, timezone


class TaskRepository:
    async def create(self, user_id: str, *, title: str, priority: TaskPriority = TaskPriority.NORMAL, due_at: datetime | None = None, completed: bool = False) -> Task:
        return await Task.create(user_id=user_id, title=title, priority=priority, due_at=due_at, completed=completed)

    async def list_for_user(self, user_id: str) -> List[Task]:
        """Все задачи пользователя по возрастанию срока"""
        return await Task.filter(user_id=user_id).order_by("due_at").all()

    async def list_due_between(self, user_id: str, start: datetime, end: datetime) -> List[Task]:
        return await Task.filter(user_id=user_id, due_at__gte=start, due_at__lt=end).order_by("due_at").all()

    async def list_due_on(self, user_id: str, day: date, tz=timezone.utc) -> List[Task]:
        """Задачи со сроком в пределах календарного дня day (в часовом поясе tz)"""
        start = datetime.combine(day, time.min, tzinfo=tz)
        return await self.list_due_between(user_id, start, start + timedelta(days=1))
