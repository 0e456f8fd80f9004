from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager
from app.core.config import get_settings
from app.core.db import close_db, init_db
from app.core.logging_config import setup_logging
from app.routers import chat, tasks
from app.routers.dependencies import get_chat_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging(get_settings().log_level)
    await init_db()
    yield
    # Shutdown: дожидаемся фоновых записей истории до закрытия соединений
    if get_chat_service.cache_info().currsize:
        await get_chat_service().drain()
    await close_db()


app = FastAPI(
    title="TaskPulse API",
    description="Чат-ассистент для управления задачами с учетом данных пользователя",
    version="1.0.0",
    lifespan=lifespan
)

app.include_router(chat.router, prefix="/api", tags=["chat"])
app.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
app.add_exception_handler(RequestValidationError, chat.chat_validation_error_handler)

__all__ = ["app"]
