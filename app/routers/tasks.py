from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
import logging

from app.routers.dependencies import get_summary_service
from app.schemas.chat import ErrorResponse, SummaryResponse
from app.services.summary_service import SummaryService


logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/summary",
    summary="Сводка задач на сегодня",
    response_model=SummaryResponse,
    responses={500: {"model": ErrorResponse}},
)
async def tasks_summary(user_id: str = Query(..., min_length=1), svc: SummaryService = Depends(get_summary_service)):
    try:
        summary = await svc.summarize_today(user_id)
    except Exception as e:
        logger.exception(f"Summary API: ошибка сводки для пользователя {user_id}: {e}")
        return JSONResponse(status_code=500, content={"error": "Something went wrong"})
    return SummaryResponse(summary=summary)
