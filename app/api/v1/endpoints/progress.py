from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.exceptions import NotFoundError
from app.models.child_model import ChildModel
from app.schemas.progress import ProgressMetrics
from app.services.progress import latest_child, load_progress_metrics
from app.utils.deps import CurrentUser
from app.utils.error_handling import get_owned_or_404

router = APIRouter()


@router.get("", response_model=ProgressMetrics)
async def get_progress(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
    child_id: Optional[UUID] = None,
):
    """
    Progress summary over the last 60 days.

    Defaults to the most recently added child when no child_id is given.
    """
    if child_id is not None:
        child = await get_owned_or_404(
            db, ChildModel, child_id, current_user["id"], "child"
        )
    else:
        child = await latest_child(db, current_user["id"])
        if child is None:
            raise NotFoundError("No children added yet", resource_type="child")

    return await load_progress_metrics(db, child)
