from typing import Any, Dict

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.activity_model import ActivityModel
from app.models.behavior_log_model import BehaviorLogModel
from app.models.child_model import ChildModel
from app.models.recommendation_model import RecommendationModel, RecommendationStatus
from app.schemas.activities import ActivityResponse
from app.schemas.behavior_logs import BehaviorLogResponse
from app.schemas.children import ChildResponse
from app.schemas.dashboard import DashboardResponse
from app.schemas.recommendations import RecommendationResponse
from app.services.profile_service import get_or_create_profile
from app.utils.error_handling import handle_database_errors

RECENT_LIMIT = 5


async def _count(db: AsyncSession, model: Any, *conditions: Any) -> int:
    query = select(func.count()).select_from(model).where(*conditions)
    result = await db.execute(query)
    return result.scalar_one()


@handle_database_errors("load_dashboard")
async def load_dashboard(
    db: AsyncSession, current_user: Dict[str, Any]
) -> DashboardResponse:
    owner_id = current_user["id"]
    profile = await get_or_create_profile(db, current_user)

    children = await db.execute(
        select(ChildModel)
        .where(ChildModel.parent_id == owner_id)
        .order_by(ChildModel.created_at.desc())
    )
    recent_logs = await db.execute(
        select(BehaviorLogModel)
        .where(BehaviorLogModel.parent_id == owner_id)
        .order_by(BehaviorLogModel.log_date.desc())
        .limit(RECENT_LIMIT)
    )
    recent_activities = await db.execute(
        select(ActivityModel)
        .where(ActivityModel.parent_id == owner_id)
        .order_by(ActivityModel.activity_date.desc())
        .limit(RECENT_LIMIT)
    )
    pending = await db.execute(
        select(RecommendationModel)
        .where(
            RecommendationModel.parent_id == owner_id,
            RecommendationModel.status == RecommendationStatus.PENDING.value,
        )
        .order_by(RecommendationModel.created_at.desc())
    )
    pending_rows = pending.scalars().all()

    return DashboardResponse(
        full_name=profile.full_name,
        children=[ChildResponse.model_validate(c) for c in children.scalars().all()],
        recent_logs=[
            BehaviorLogResponse.model_validate(row)
            for row in recent_logs.scalars().all()
        ],
        logs_count=await _count(
            db, BehaviorLogModel, BehaviorLogModel.parent_id == owner_id
        ),
        recent_activities=[
            ActivityResponse.model_validate(row)
            for row in recent_activities.scalars().all()
        ],
        activities_count=await _count(
            db, ActivityModel, ActivityModel.parent_id == owner_id
        ),
        pending_recommendations=[
            RecommendationResponse.model_validate(row) for row in pending_rows
        ],
        pending_recommendations_count=len(pending_rows),
    )
