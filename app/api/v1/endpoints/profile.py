from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.profile import ProfileResponse, ProfileUpdate
from app.services import profile_service
from app.services.audit import log_audit
from app.utils.deps import CurrentUser

router = APIRouter()


@router.get("", response_model=ProfileResponse)
async def get_profile(
    request: Request, current_user: CurrentUser, db: AsyncSession = Depends(get_db)
):
    """Get the caller's profile"""
    profile = await profile_service.get_or_create_profile(db, current_user)
    await log_audit(current_user, "view", "profiles", profile.id, request)
    return profile


@router.put("", response_model=ProfileResponse)
async def update_profile(
    profile_data: ProfileUpdate,
    request: Request,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    """Update the caller's display name"""
    profile = await profile_service.update_profile(
        db, current_user, profile_data.full_name
    )
    await log_audit(current_user, "update", "profiles", profile.id, request)
    return profile


@router.delete("", status_code=status.HTTP_200_OK)
async def delete_account(
    request: Request, current_user: CurrentUser, db: AsyncSession = Depends(get_db)
):
    """Permanently delete the caller's profile and all child data"""
    await profile_service.delete_account_data(db, current_user["id"])
    await log_audit(current_user, "delete", "profiles", current_user["id"], request)
    return {"status": "success", "message": "Account data deleted successfully"}
