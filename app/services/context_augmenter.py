"""
Преобразование сырого контекста пользователя в структуры для промпта.
Чистая функция: без I/O, текущее время читается один раз на входе.
"""
import math
from datetime import datetime, timezone, tzinfo
from typing import List, Optional

from app.models.task import TaskPriority
from app.schemas.context import (
    AugmentedContext,
    RetrievedContext,
    TaskLists,
    TaskRecord,
    TaskStats,
)


DEFAULT_USER_NAME = "User"
UPCOMING_LIMIT = 5
HIGH_PRIORITIES = {TaskPriority.HIGH, TaskPriority.URGENT}


def completion_rate(completed: int, total: int) -> int:
    """Процент выполненных задач, округленный до целого (половина вверх); 0 при отсутствии задач"""
    if total <= 0:
        return 0
    return math.floor(100 * completed / total + 0.5)


def to_local(value: datetime, tz: tzinfo) -> datetime:
    """Приводит дату к поясу tz; наивные значения считаются уже заданными в tz"""
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def compute_task_stats(tasks: List[TaskRecord]) -> TaskStats:
    total = len(tasks)
    completed = sum(1 for t in tasks if t.completed)
    return TaskStats(
        total=total,
        completed=completed,
        pending=total - completed,
        completion_rate=completion_rate(completed, total),
    )


def bucket_tasks(tasks: List[TaskRecord], now: datetime, tz: tzinfo) -> TaskLists:
    """
    Раскладывает незавершенные задачи по корзинам.

    overdue и today вычисляются независимо друг от друга: задача со сроком
    раньше сегодня, но уже прошедшим, попадает в обе корзины.
    high_priority хранит полный набор, обрезка происходит при рендеринге.
    """
    today = now.date()
    overdue, due_today, upcoming, high_priority = [], [], [], []

    for task in tasks:
        if task.completed:
            continue
        if task.priority in HIGH_PRIORITIES:
            high_priority.append(task)
        if task.due_at is None:
            continue

        due = to_local(task.due_at, tz)
        task = task.model_copy(update={"due_at": due})
        if due < now:
            overdue.append(task)
        if due.date() == today:
            due_today.append(task)
        if due > now:
            upcoming.append(task)

    upcoming.sort(key=lambda t: t.due_at)
    return TaskLists(
        overdue=overdue,
        today=due_today,
        upcoming=upcoming[:UPCOMING_LIMIT],
        high_priority=high_priority,
    )


def augment_context(context: RetrievedContext, now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> AugmentedContext:
    """
    Строит AugmentedContext из RetrievedContext.

    Args:
        context: данные, собранные ContextRetriever
        now: текущее время (по умолчанию datetime.now(tz))
        tz: часовой пояс для календарных сравнений (по умолчанию UTC)
    """
    tz = tz or timezone.utc
    now = to_local(now, tz) if now is not None else datetime.now(tz)

    name = context.profile.full_name if context.profile else None
    user_name = name.strip() if name and name.strip() else DEFAULT_USER_NAME

    return AugmentedContext(
        user_name=user_name,
        task_stats=compute_task_stats(context.tasks),
        lists=bucket_tasks(context.tasks, now, tz),
        history=list(reversed(context.history)),
        recent_activity=[entry.description for entry in context.activity],
        streak=context.statistics.current_streak_days if context.statistics else 0,
    )
