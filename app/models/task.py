from tortoise import fields, models
from enum import Enum
import uuid


class TaskPriority(str, Enum):
    """Приоритет задачи"""
    LOW = "Low"
    NORMAL = "Normal"
    HIGH = "High"
    URGENT = "Urgent"


class Task(models.Model):
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    user_id = fields.CharField(max_length=64, description="Внешний ID пользователя")
    title = fields.CharField(max_length=255)
    priority = fields.CharEnumField(TaskPriority, default=TaskPriority.NORMAL, description="Приоритет задачи")
    due_at = fields.DatetimeField(null=True, source_field="datetime", description="Срок выполнения")
    completed = fields.BooleanField(default=False, description="Статус выполнения")

    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "tasks"
        indexes = (("user_id", "completed"),)
