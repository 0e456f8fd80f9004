from fastapi import APIRouter, Depends, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging

from app.routers.dependencies import get_chat_service
from app.schemas.chat import ChatRequest, ChatResponse, ErrorResponse
from app.services.chat_service import ChatInputError, ChatService


logger = logging.getLogger(__name__)
router = APIRouter()

CHAT_PATH = "/api/chat"
INPUT_ERROR_MESSAGE = "Message and userId are required"


@router.post("/chat",
    summary="Chat",
    description="Отвечает на сообщение пользователя с учетом его задач, статистики и истории диалога.",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(payload: ChatRequest, svc: ChatService = Depends(get_chat_service)):
    try:
        reply = await svc.handle_chat_turn(payload.message, payload.user_id)
    except ChatInputError as e:
        logger.info(f"Chat API: некорректный запрос: {e}")
        return JSONResponse(status_code=400, content={"error": str(e)})

    if not reply.ok:
        return JSONResponse(status_code=500, content={"error": reply.text})
    return ChatResponse(response=reply.text)


async def chat_validation_error_handler(request: Request, exc: RequestValidationError):
    """Невалидное тело запроса чата (нет тела, нестроковые поля) - ошибка ввода с ответом 400"""
    if request.url.path != CHAT_PATH:
        return await request_validation_exception_handler(request, exc)
    logger.info(f"Chat API: невалидное тело запроса: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": INPUT_ERROR_MESSAGE})
