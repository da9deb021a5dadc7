from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.exceptions import DatabaseError, ValidationError
from app.models.child_model import ChildModel
from app.models.recommendation_model import RecommendationModel, RecommendationStatus
from app.schemas.children import (
    ChildCreate,
    ChildrenListResponse,
    ChildResponse,
    ChildUpdate,
)
from app.schemas.recommendations import (
    ChildRecommendationsResponse,
    RecommendationResponse,
)
from app.services.audit import log_audit
from app.utils.deps import CurrentUser
from app.utils.error_handling import get_owned_or_404

router = APIRouter()
logger = structlog.get_logger()


@router.get("/", response_model=ChildrenListResponse)
async def get_children(current_user: CurrentUser, db: AsyncSession = Depends(get_db)):
    """Get all children for the current user"""
    query = (
        select(ChildModel)
        .where(ChildModel.parent_id == current_user["id"])
        .order_by(ChildModel.created_at.desc())
    )

    try:
        result = await db.execute(query)
        children = result.scalars().all()
        return ChildrenListResponse(
            children=[ChildResponse.model_validate(child) for child in children]
        )
    except Exception as e:
        logger.exception(
            "Error in get_children",
            error=str(e),
            error_type=type(e).__name__,
            user_id=str(current_user["id"]),
        )
        raise DatabaseError(
            "Failed to retrieve children", operation="get_children"
        ) from e


@router.post("/", response_model=ChildResponse)
async def create_child(
    child_data: ChildCreate,
    request: Request,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    """Create a new child"""
    child = ChildModel(parent_id=current_user["id"], **child_data.model_dump())

    try:
        db.add(child)
        await db.commit()
        await db.refresh(child)
    except Exception as e:
        await db.rollback()
        logger.error(
            "Database error in create_child",
            error=str(e),
            error_type=type(e).__name__,
            user_id=str(current_user["id"]),
        )
        raise DatabaseError("Failed to create child", operation="create_child") from e

    await log_audit(current_user, "create", "children", child.id, request)
    return ChildResponse.model_validate(child)


@router.get("/{child_id}", response_model=ChildResponse)
async def get_child(
    child_id: UUID,
    request: Request,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    """Get a single child"""
    child = await get_owned_or_404(
        db, ChildModel, child_id, current_user["id"], "child"
    )
    await log_audit(current_user, "view", "children", child.id, request)
    return ChildResponse.model_validate(child)


@router.put("/{child_id}", response_model=ChildResponse)
async def update_child(
    child_id: UUID,
    child_data: ChildUpdate,
    request: Request,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    """Update a child"""
    child = await get_owned_or_404(
        db, ChildModel, child_id, current_user["id"], "child"
    )

    changes = child_data.model_dump(exclude_unset=True)
    if not changes:
        raise ValidationError("No fields to update")
    if changes.get("first_name") is None and "first_name" in changes:
        raise ValidationError("First name cannot be empty", field="first_name")
    if changes.get("date_of_birth") is None and "date_of_birth" in changes:
        raise ValidationError("Date of birth cannot be empty", field="date_of_birth")

    try:
        for field_name, value in changes.items():
            setattr(child, field_name, value)
        await db.commit()
        await db.refresh(child)
    except Exception as e:
        await db.rollback()
        raise DatabaseError("Failed to update child", operation="update_child") from e

    await log_audit(current_user, "update", "children", child.id, request)
    return ChildResponse.model_validate(child)


@router.delete("/{child_id}")
async def delete_child(
    child_id: UUID,
    request: Request,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    """Delete a child"""
    child = await get_owned_or_404(
        db, ChildModel, child_id, current_user["id"], "child"
    )

    try:
        # Cascades to the child's logs, activities and recommendations
        await db.delete(child)
        await db.commit()
    except Exception as e:
        await db.rollback()
        raise DatabaseError("Failed to delete child", operation="delete_child") from e

    await log_audit(current_user, "delete", "children", child_id, request)
    return {"status": "success", "message": "Child deleted successfully"}


@router.get(
    "/{child_id}/recommendations", response_model=ChildRecommendationsResponse
)
async def get_child_recommendations(
    child_id: UUID,
    request: Request,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    """List a child's recommendations grouped by status, newest first"""
    await get_owned_or_404(db, ChildModel, child_id, current_user["id"], "child")

    query = (
        select(RecommendationModel)
        .where(
            RecommendationModel.child_id == child_id,
            RecommendationModel.parent_id == current_user["id"],
        )
        .order_by(RecommendationModel.created_at.desc())
    )
    rows = (await db.execute(query)).scalars().all()

    grouped: dict[str, list[RecommendationResponse]] = {
        status.value: [] for status in RecommendationStatus
    }
    for row in rows:
        grouped.setdefault(row.status, []).append(
            RecommendationResponse.model_validate(row)
        )

    await log_audit(current_user, "view", "ai_recommendations", child_id, request)
    return ChildRecommendationsResponse(
        pending=grouped[RecommendationStatus.PENDING.value],
        completed=grouped[RecommendationStatus.COMPLETED.value],
        skipped=grouped[RecommendationStatus.SKIPPED.value],
    )
