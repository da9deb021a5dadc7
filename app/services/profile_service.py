from typing import Any, Dict
from uuid import UUID

import structlog
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.activity_model import ActivityModel
from app.models.behavior_log_model import BehaviorLogModel
from app.models.child_model import ChildModel
from app.models.profile_model import ProfileModel
from app.models.recommendation_model import RecommendationModel

logger = structlog.get_logger()


async def get_or_create_profile(
    db: AsyncSession, current_user: Dict[str, Any]
) -> ProfileModel:
    """Get the caller's profile, creating it on first access.

    Args:
        db: Database session
        current_user: Authenticated caller

    Returns:
        The caller's profile
    """
    profile = await db.get(ProfileModel, current_user["id"])
    if profile is None:
        profile = ProfileModel(id=current_user["id"], email=current_user.get("email"))
        db.add(profile)
        await db.commit()
        logger.info("Created profile", user_id=str(current_user["id"]))
    return profile


async def update_profile(
    db: AsyncSession, current_user: Dict[str, Any], full_name: str
) -> ProfileModel:
    profile = await get_or_create_profile(db, current_user)
    profile.full_name = full_name
    await db.commit()
    await db.refresh(profile)
    return profile


async def delete_account_data(db: AsyncSession, owner_id: UUID) -> None:
    """Delete the profile and every record owned by it.

    Audit entries are retained.
    """
    for model in (
        RecommendationModel,
        ActivityModel,
        BehaviorLogModel,
        ChildModel,
    ):
        await db.execute(delete(model).where(model.parent_id == owner_id))
    await db.execute(delete(ProfileModel).where(ProfileModel.id == owner_id))
    await db.commit()
    logger.info("Deleted account data", user_id=str(owner_id))
