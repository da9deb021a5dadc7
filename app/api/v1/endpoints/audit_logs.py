from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.audit import AuditLogListResponse, AuditLogResponse
from app.services.audit import list_audit_logs
from app.utils.deps import CurrentUser

router = APIRouter()


@router.get("", response_model=AuditLogListResponse)
async def get_audit_logs(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
    limit: int = Query(10, ge=1, le=100),
):
    """Recent data access events for the caller"""
    rows = await list_audit_logs(db, current_user["id"], limit=limit)
    return AuditLogListResponse(
        audit_logs=[AuditLogResponse.model_validate(row) for row in rows]
    )
