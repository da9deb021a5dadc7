from datetime import date
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.exceptions import ValidationError
from app.schemas.analysis import AnalyzeRequest, AnalyzeResponse
from app.services import analysis as analysis_service
from app.services.audit import log_audit
from app.utils.deps import CurrentUser

router = APIRouter()
logger = structlog.get_logger()


def parse_child_id(payload: AnalyzeRequest) -> UUID:
    if not payload.child_id:
        raise ValidationError("Child ID is required", field="childId")
    try:
        return UUID(payload.child_id)
    except ValueError:
        raise ValidationError("Child ID must be a valid UUID", field="childId")


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_child(
    payload: AnalyzeRequest,
    request: Request,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    """
    Generate AI recommendations and insights from a child's last 30 days.

    The generated result is returned even if saving the recommendations
    fails; that failure is only logged.
    """
    child_id = parse_child_id(payload)
    owner_id = current_user["id"]
    today = date.today()

    _, context = await analysis_service.load_analysis_context(
        db, child_id, owner_id, today
    )
    result = await analysis_service.generate_recommendations(context)
    saved = await analysis_service.persist_recommendations(
        db, result.recommendations, child_id, owner_id, today
    )

    logger.info(
        "Analysis completed",
        child_id=str(child_id),
        recommendations=len(result.recommendations),
        saved=saved,
    )
    if saved:
        await log_audit(current_user, "create", "ai_recommendations", child_id, request)

    return AnalyzeResponse(
        success=True,
        recommendations=result.recommendations,
        insights=result.insights,
    )
