from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.activity_model import ActivityType, CompletionStatus


class ActivityBase(BaseModel):
    activity_date: date = Field(default_factory=date.today)
    activity_type: ActivityType
    activity_name: str = Field(..., min_length=1, max_length=255)
    duration_minutes: Optional[int] = Field(None, ge=0)
    difficulty_level: int = Field(3, ge=1, le=5)
    child_engagement: int = Field(3, ge=1, le=5)
    completion_status: CompletionStatus
    notes: Optional[str] = None


class ActivityCreate(ActivityBase):
    """Schema for recording an activity"""

    child_id: UUID

    @field_validator("notes")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None


class ActivityResponse(ActivityBase):
    id: UUID
    child_id: UUID
    parent_id: UUID
    activity_type: str
    completion_status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ActivityListResponse(BaseModel):
    activities: list[ActivityResponse]
