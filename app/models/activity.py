from tortoise import fields, models


class ActivityEntry(models.Model):
    """Запись журнала активности пользователя"""
    id = fields.IntField(pk=True)
    user_id = fields.CharField(max_length=64)
    description = fields.TextField()
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "activity_log"
        indexes = (("user_id", "created_at"),)
