from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class ChatRequest(BaseModel):
    """Входящее сообщение чата; обязательность полей проверяет ChatService"""
    model_config = ConfigDict(populate_by_name=True)

    message: Optional[str] = None
    user_id: Optional[str] = Field(default=None, alias="userId")


class ChatResponse(BaseModel):
    response: str


class ErrorResponse(BaseModel):
    error: str


class SummaryResponse(BaseModel):
    summary: str
