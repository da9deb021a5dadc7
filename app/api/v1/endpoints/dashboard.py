from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.dashboard import DashboardResponse
from app.services.dashboard import load_dashboard
from app.utils.deps import CurrentUser

router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def get_dashboard(current_user: CurrentUser, db: AsyncSession = Depends(get_db)):
    """Overview of children, recent entries and pending recommendations"""
    return await load_dashboard(db, current_user)
