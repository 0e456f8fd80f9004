from tortoise import fields, models


class UserStatistics(models.Model):
    user_id = fields.CharField(max_length=64, pk=True)
    current_streak_days = fields.IntField(default=0)
    tasks_completed_total = fields.IntField(default=0)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "user_statistics"
