from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.exceptions import DatabaseError
from app.services.audit import log_audit
from app.services.export import build_export, export_filename
from app.utils.deps import CurrentUser

router = APIRouter()
logger = structlog.get_logger()


@router.get("")
async def export_data(
    request: Request, current_user: CurrentUser, db: AsyncSession = Depends(get_db)
):
    """Download everything the caller owns as a single JSON document"""
    now = datetime.now(timezone.utc)

    try:
        document = await build_export(db, current_user["id"], now)
    except Exception as e:
        logger.exception(
            "Data export error",
            error=str(e),
            error_type=type(e).__name__,
            user_id=str(current_user["id"]),
        )
        raise DatabaseError("Failed to export data", operation="export_data") from e

    await log_audit(current_user, "view", "profiles", current_user["id"], request)
    return JSONResponse(
        content=document,
        headers={
            "Content-Disposition": f'attachment; filename="{export_filename(now)}"'
        },
    )
