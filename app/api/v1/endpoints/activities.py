from datetime import date
from typing import Optional
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.exceptions import DatabaseError
from app.models.activity_model import ActivityModel
from app.models.child_model import ChildModel
from app.schemas.activities import (
    ActivityCreate,
    ActivityListResponse,
    ActivityResponse,
)
from app.services.audit import log_audit
from app.utils.deps import CurrentUser
from app.utils.error_handling import get_owned_or_404

router = APIRouter()
logger = structlog.get_logger()


@router.post("/", response_model=ActivityResponse, status_code=status.HTTP_201_CREATED)
async def create_activity(
    activity_data: ActivityCreate,
    request: Request,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    """Record an activity for a child"""
    await get_owned_or_404(
        db, ChildModel, activity_data.child_id, current_user["id"], "child"
    )

    values = activity_data.model_dump()
    values["activity_type"] = activity_data.activity_type.value
    values["completion_status"] = activity_data.completion_status.value
    activity = ActivityModel(parent_id=current_user["id"], **values)

    try:
        db.add(activity)
        await db.commit()
        await db.refresh(activity)
    except Exception as e:
        await db.rollback()
        logger.error(
            "Database error in create_activity",
            error=str(e),
            error_type=type(e).__name__,
            user_id=str(current_user["id"]),
            child_id=str(activity_data.child_id),
        )
        raise DatabaseError(
            "Failed to create activity", operation="create_activity"
        ) from e

    await log_audit(current_user, "create", "activities", activity.id, request)
    return ActivityResponse.model_validate(activity)


@router.get("/", response_model=ActivityListResponse)
async def list_activities(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
    child_id: Optional[UUID] = None,
    since: Optional[date] = None,
    limit: int = Query(100, ge=1, le=500),
):
    """List the caller's activities, newest first"""
    query = select(ActivityModel).where(ActivityModel.parent_id == current_user["id"])
    if child_id is not None:
        query = query.where(ActivityModel.child_id == child_id)
    if since is not None:
        query = query.where(ActivityModel.activity_date >= since)
    query = query.order_by(
        ActivityModel.activity_date.desc(), ActivityModel.created_at.desc()
    ).limit(limit)

    rows = (await db.execute(query)).scalars().all()
    return ActivityListResponse(
        activities=[ActivityResponse.model_validate(row) for row in rows]
    )
