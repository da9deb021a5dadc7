from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.behavior_log_model import Mood


class BehaviorLogBase(BaseModel):
    log_date: date = Field(default_factory=date.today)
    mood: Optional[Mood] = None
    energy_level: int = Field(3, ge=1, le=5)
    sleep_quality: int = Field(3, ge=1, le=5)
    sleep_hours: Optional[float] = Field(None, ge=0, le=24)
    behaviors_observed: list[str] = Field(default_factory=list)
    triggers: Optional[str] = None
    successes: Optional[str] = None
    challenges: Optional[str] = None
    notes: Optional[str] = None


class BehaviorLogCreate(BehaviorLogBase):
    """Schema for logging a day of behavior observations"""

    child_id: UUID

    @field_validator("behaviors_observed")
    @classmethod
    def strip_behaviors(cls, value: list[str]) -> list[str]:
        return [tag.strip() for tag in value if tag and tag.strip()]

    @field_validator("triggers", "successes", "challenges", "notes")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None


class BehaviorLogResponse(BehaviorLogBase):
    id: UUID
    child_id: UUID
    parent_id: UUID
    mood: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BehaviorLogListResponse(BaseModel):
    behavior_logs: list[BehaviorLogResponse]
