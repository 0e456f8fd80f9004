from tortoise import fields, models


class UserProfile(models.Model):
    """Профиль пользователя; ключ совпадает с внешним ID пользователя"""
    user_id = fields.CharField(max_length=64, pk=True)
    full_name = fields.CharField(max_length=255, null=True)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "profiles"
