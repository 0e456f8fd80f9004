"""
Модели контекста одного хода чата: записи из хранилища и производные структуры для промпта.
"""
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import List, Optional
import uuid

from app.models.task import TaskPriority


class ProfileRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    full_name: Optional[str] = None


class TaskRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    user_id: str
    title: str
    priority: TaskPriority = TaskPriority.NORMAL
    due_at: Optional[datetime] = None
    completed: bool = False


class StatisticsRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: Optional[str] = None
    current_streak_days: int = 0
    tasks_completed_total: int = 0


class ActivityRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    description: str
    created_at: Optional[datetime] = None


class ConversationRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    message: str
    response: str
    created_at: Optional[datetime] = None


class RetrievedContext(BaseModel):
    """Сырые данные пользователя, собранные для одного запроса"""
    profile: Optional[ProfileRecord] = None
    tasks: List[TaskRecord] = []
    statistics: StatisticsRecord = Field(default_factory=StatisticsRecord)
    activity: List[ActivityRecord] = []  # от новых к старым
    history: List[ConversationRecord] = []  # от новых к старым


class TaskStats(BaseModel):
    total: int = 0
    completed: int = 0
    pending: int = 0
    completion_rate: int = 0


class TaskLists(BaseModel):
    overdue: List[TaskRecord] = []
    today: List[TaskRecord] = []
    upcoming: List[TaskRecord] = []
    high_priority: List[TaskRecord] = []


class AugmentedContext(BaseModel):
    """Контекст, подготовленный для рендеринга промпта"""
    user_name: str = "User"
    task_stats: TaskStats = Field(default_factory=TaskStats)
    lists: TaskLists = Field(default_factory=TaskLists)
    history: List[ConversationRecord] = []  # хронологический порядок
    recent_activity: List[str] = []
    streak: int = 0
