"""Derived progress metrics for the dashboard charts and data export."""

from collections import Counter, defaultdict
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.activity_model import ActivityModel, CompletionStatus
from app.models.behavior_log_model import BehaviorLogModel
from app.models.child_model import ChildModel
from app.schemas.progress import (
    ActivityEngagement,
    BehaviorTrendPoint,
    ProgressMetrics,
    SleepPoint,
)


def _round_half_up(value: float, places: str = "0.1") -> Decimal:
    return Decimal(value).quantize(Decimal(places), rounding=ROUND_HALF_UP)


def _average(values: list[int]) -> Optional[float]:
    if not values:
        return None
    return float(_round_half_up(sum(values) / len(values)))


def compute_progress_metrics(
    child: ChildModel,
    behavior_logs: Iterable[BehaviorLogModel],
    activities: Iterable[ActivityModel],
    since: date,
    window_days: int,
) -> ProgressMetrics:
    """Summarise logs and activities (expected oldest first) for one child."""
    behavior_logs = list(behavior_logs)
    activities = list(activities)

    completed = sum(
        1
        for activity in activities
        if activity.completion_status == CompletionStatus.COMPLETED.value
    )
    completion_rate = 0
    if activities:
        completion_rate = int(_round_half_up(completed / len(activities) * 100, "1"))

    engagement_by_type: dict[str, list[int]] = defaultdict(list)
    for activity in activities:
        engagement_by_type[activity.activity_type].append(
            activity.child_engagement or 0
        )

    return ProgressMetrics(
        child_id=child.id,
        child_name=child.first_name,
        window_days=window_days,
        since=since,
        behavior_log_count=len(behavior_logs),
        activity_count=len(activities),
        avgEnergyLevel=_average([log.energy_level or 0 for log in behavior_logs]),
        avgSleepQuality=_average([log.sleep_quality or 0 for log in behavior_logs]),
        avgEngagement=_average([act.child_engagement or 0 for act in activities]),
        completionRate=completion_rate,
        moodDistribution=dict(Counter(log.mood for log in behavior_logs if log.mood)),
        behaviorTrends=[
            BehaviorTrendPoint(
                log_date=log.log_date,
                energy_level=log.energy_level,
                sleep_quality=log.sleep_quality,
            )
            for log in behavior_logs
        ],
        sleepQuality=[
            SleepPoint(
                log_date=log.log_date,
                sleep_quality=log.sleep_quality,
                sleep_hours=log.sleep_hours,
            )
            for log in behavior_logs
            if log.sleep_hours
        ],
        activityEngagement=[
            ActivityEngagement(
                activity_type=activity_type,
                avg_engagement=_average(values) or 0.0,
                count=len(values),
            )
            for activity_type, values in sorted(engagement_by_type.items())
        ],
    )


async def load_progress_metrics(
    db: AsyncSession,
    child: ChildModel,
    today: date | None = None,
    window_days: int | None = None,
) -> ProgressMetrics:
    """Query the trailing window for a child and compute its metrics."""
    window_days = window_days or settings.PROGRESS_WINDOW_DAYS
    since = (today or date.today()) - timedelta(days=window_days)

    logs = await db.execute(
        select(BehaviorLogModel)
        .where(
            BehaviorLogModel.child_id == child.id,
            BehaviorLogModel.log_date >= since,
        )
        .order_by(BehaviorLogModel.log_date.asc())
    )
    activities = await db.execute(
        select(ActivityModel)
        .where(
            ActivityModel.child_id == child.id,
            ActivityModel.activity_date >= since,
        )
        .order_by(ActivityModel.activity_date.asc())
    )
    return compute_progress_metrics(
        child,
        logs.scalars().all(),
        activities.scalars().all(),
        since=since,
        window_days=window_days,
    )


async def latest_child(db: AsyncSession, owner_id: UUID) -> Optional[ChildModel]:
    """The most recently added child of a parent, if any."""
    query = (
        select(ChildModel)
        .where(ChildModel.parent_id == owner_id)
        .order_by(ChildModel.created_at.desc())
        .limit(1)
    )
    return (await db.execute(query)).scalars().first()
