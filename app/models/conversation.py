from tortoise import fields, models


class ConversationTurn(models.Model):
    """Один обмен репликами: сообщение пользователя и ответ ассистента"""
    id = fields.IntField(pk=True)
    user_id = fields.CharField(max_length=64, description="Внешний ID пользователя")
    message = fields.TextField(description="Текст сообщения")
    response = fields.TextField(description="Ответ ассистента")
    created_at = fields.DatetimeField(auto_now_add=True, description="Время сохранения")

    class Meta:
        table = "conversation_history"
        indexes = (("user_id", "created_at"),)

    def __str__(self):
        return f"ConversationTurn(id={self.id}, user_id={self.user_id}, message='{self.message[:50]}...')"
