from typing import Optional

from pydantic import BaseModel

from app.schemas.activities import ActivityResponse
from app.schemas.behavior_logs import BehaviorLogResponse
from app.schemas.children import ChildResponse
from app.schemas.recommendations import RecommendationResponse


class DashboardResponse(BaseModel):
    full_name: Optional[str] = None
    children: list[ChildResponse]
    recent_logs: list[BehaviorLogResponse]
    logs_count: int
    recent_activities: list[ActivityResponse]
    activities_count: int
    pending_recommendations: list[RecommendationResponse]
    pending_recommendations_count: int
