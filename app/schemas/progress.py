from datetime import date
from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class BehaviorTrendPoint(BaseModel):
    log_date: date
    energy_level: int
    sleep_quality: int


class SleepPoint(BaseModel):
    log_date: date
    sleep_quality: int
    sleep_hours: Optional[float] = None


class ActivityEngagement(BaseModel):
    activity_type: str
    avg_engagement: float
    count: int


class ProgressMetrics(BaseModel):
    """Summary statistics derived from a child's recent logs and activities"""

    child_id: UUID
    child_name: str
    window_days: int
    since: date
    behavior_log_count: int
    activity_count: int
    avgEnergyLevel: Optional[float] = None
    avgSleepQuality: Optional[float] = None
    avgEngagement: Optional[float] = None
    completionRate: int = 0
    moodDistribution: dict[str, int]
    behaviorTrends: list[BehaviorTrendPoint]
    sleepQuality: list[SleepPoint]
    activityEngagement: list[ActivityEngagement]
