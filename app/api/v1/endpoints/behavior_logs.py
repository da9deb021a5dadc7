from datetime import date
from typing import Optional
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.exceptions import DatabaseError
from app.models.behavior_log_model import BehaviorLogModel
from app.models.child_model import ChildModel
from app.schemas.behavior_logs import (
    BehaviorLogCreate,
    BehaviorLogListResponse,
    BehaviorLogResponse,
)
from app.services.audit import log_audit
from app.utils.deps import CurrentUser
from app.utils.error_handling import get_owned_or_404

router = APIRouter()
logger = structlog.get_logger()


@router.post(
    "/", response_model=BehaviorLogResponse, status_code=status.HTTP_201_CREATED
)
async def create_behavior_log(
    log_data: BehaviorLogCreate,
    request: Request,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    """Log a day of behavior observations for a child"""
    await get_owned_or_404(
        db, ChildModel, log_data.child_id, current_user["id"], "child"
    )

    values = log_data.model_dump()
    values["mood"] = log_data.mood.value if log_data.mood else None
    log = BehaviorLogModel(parent_id=current_user["id"], **values)

    try:
        db.add(log)
        await db.commit()
        await db.refresh(log)
    except Exception as e:
        await db.rollback()
        logger.error(
            "Database error in create_behavior_log",
            error=str(e),
            error_type=type(e).__name__,
            user_id=str(current_user["id"]),
            child_id=str(log_data.child_id),
        )
        raise DatabaseError(
            "Failed to create behavior log", operation="create_behavior_log"
        ) from e

    await log_audit(current_user, "create", "behavior_logs", log.id, request)
    return BehaviorLogResponse.model_validate(log)


@router.get("/", response_model=BehaviorLogListResponse)
async def list_behavior_logs(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
    child_id: Optional[UUID] = None,
    since: Optional[date] = None,
    limit: int = Query(100, ge=1, le=500),
):
    """List the caller's behavior logs, newest first"""
    query = select(BehaviorLogModel).where(
        BehaviorLogModel.parent_id == current_user["id"]
    )
    if child_id is not None:
        query = query.where(BehaviorLogModel.child_id == child_id)
    if since is not None:
        query = query.where(BehaviorLogModel.log_date >= since)
    query = query.order_by(
        BehaviorLogModel.log_date.desc(), BehaviorLogModel.created_at.desc()
    ).limit(limit)

    rows = (await db.execute(query)).scalars().all()
    return BehaviorLogListResponse(
        behavior_logs=[BehaviorLogResponse.model_validate(row) for row in rows]
    )
