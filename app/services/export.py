"""Data portability export of everything a parent owns."""

from datetime import datetime, timezone
from typing import Any, Dict
from uuid import UUID

from fastapi.encoders import jsonable_encoder
from sqlalchemy import inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.activity_model import ActivityModel
from app.models.behavior_log_model import BehaviorLogModel
from app.models.child_model import ChildModel
from app.models.profile_model import ProfileModel
from app.models.recommendation_model import RecommendationModel
from app.services.progress import load_progress_metrics

EXPORT_METADATA = {
    "format": "JSON",
    "version": "1.0",
    "compliance": "HIPAA Data Portability",
}


def row_to_dict(row: Any) -> Dict[str, Any]:
    """Column values of an ORM row, keyed by column name."""
    mapper = inspect(row).mapper
    return {
        column.name: getattr(row, attr.key)
        for attr in mapper.column_attrs
        for column in attr.columns
    }


def export_filename(now: datetime) -> str:
    return f"samd-care-export-{now.date().isoformat()}.json"


async def build_export(
    db: AsyncSession, owner_id: UUID, now: datetime | None = None
) -> Dict[str, Any]:
    """
    Collect every row owned by a parent into one JSON-ready document.

    Args:
        db: Database session
        owner_id: Authenticated parent
        now: Export timestamp

    Returns:
        A dict safe to pass to a JSON encoder
    """
    now = now or datetime.now(timezone.utc)

    async def owned(model: Any) -> list[Any]:
        result = await db.execute(select(model).where(model.parent_id == owner_id))
        return list(result.scalars().all())

    profile = await db.get(ProfileModel, owner_id)
    children = await owned(ChildModel)
    behavior_logs = await owned(BehaviorLogModel)
    activities = await owned(ActivityModel)
    recommendations = await owned(RecommendationModel)
    progress_metrics = [
        await load_progress_metrics(db, child, today=now.date()) for child in children
    ]

    return jsonable_encoder(
        {
            "exportDate": now.isoformat(),
            "profile": row_to_dict(profile) if profile else None,
            "children": [row_to_dict(row) for row in children],
            "behaviorLogs": [row_to_dict(row) for row in behavior_logs],
            "activities": [row_to_dict(row) for row in activities],
            "recommendations": [row_to_dict(row) for row in recommendations],
            "progressMetrics": [metrics.model_dump() for metrics in progress_metrics],
            "metadata": EXPORT_METADATA,
        }
    )
