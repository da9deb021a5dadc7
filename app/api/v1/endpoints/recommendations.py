from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.exceptions import ConflictError, ValidationError
from app.models.recommendation_model import RecommendationModel, RecommendationStatus
from app.schemas.recommendations import (
    RecommendationResponse,
    RecommendationStatusUpdate,
)
from app.services.audit import log_audit
from app.utils.deps import CurrentUser
from app.utils.error_handling import get_owned_or_404

router = APIRouter()
logger = structlog.get_logger()


@router.patch("/{recommendation_id}", response_model=RecommendationResponse)
async def update_recommendation_status(
    recommendation_id: UUID,
    status_data: RecommendationStatusUpdate,
    request: Request,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    """Mark a pending recommendation as completed or skipped"""
    recommendation = await get_owned_or_404(
        db,
        RecommendationModel,
        recommendation_id,
        current_user["id"],
        "recommendation",
    )

    if status_data.status == RecommendationStatus.PENDING:
        raise ValidationError("Status must be completed or skipped", field="status")
    if recommendation.status != RecommendationStatus.PENDING.value:
        raise ConflictError(f"Recommendation is already {recommendation.status}")

    recommendation.status = status_data.status.value
    await db.commit()
    await db.refresh(recommendation)

    logger.info(
        "Recommendation status updated",
        recommendation_id=str(recommendation_id),
        status=recommendation.status,
    )
    await log_audit(
        current_user, "update", "ai_recommendations", recommendation_id, request
    )
    return RecommendationResponse.model_validate(recommendation)
