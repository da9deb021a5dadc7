from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from app.models.recommendation_model import RecommendationStatus


class RecommendationResponse(BaseModel):
    id: UUID
    child_id: UUID
    parent_id: UUID
    recommendation_date: date
    recommendation_type: str
    title: str
    description: str
    rationale: str
    priority: str
    status: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ChildRecommendationsResponse(BaseModel):
    """Recommendations for one child, grouped by lifecycle status"""

    pending: list[RecommendationResponse]
    completed: list[RecommendationResponse]
    skipped: list[RecommendationResponse]


class RecommendationStatusUpdate(BaseModel):
    status: RecommendationStatus
