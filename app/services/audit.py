"""Best-effort audit trail of data access events."""

from typing import Any, Dict, Optional, Union
from uuid import UUID

import structlog
from fastapi import Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app import database
from app.models.audit_log_model import AuditAction, AuditLogModel

logger = structlog.get_logger()

UNKNOWN = "unknown"


def request_origin(request: Optional[Request]) -> tuple[str, str]:
    """Return ``(ip_address, user_agent)`` for a request, ``unknown`` when absent."""
    if request is None:
        return UNKNOWN, UNKNOWN

    ip_address = (
        request.headers.get("x-forwarded-for")
        or request.headers.get("x-real-ip")
        or UNKNOWN
    )
    user_agent = request.headers.get("user-agent") or UNKNOWN
    return ip_address, user_agent


async def log_audit(
    actor: Optional[Dict[str, Any]],
    action: Union[AuditAction, str],
    table_name: str,
    record_id: Optional[Union[UUID, str]] = None,
    request: Optional[Request] = None,
) -> None:
    """
    Append an audit entry for the given actor.

    Writes through its own session so a failing audit insert can never roll
    back or abort the caller's work. Without an actor this is a no-op.

    Args:
        actor: The authenticated caller, or None
        action: view, create, update or delete
        table_name: Table the action touched
        record_id: Optional id of the affected row
        request: Optional request used for origin metadata
    """
    if not actor:
        return

    try:
        ip_address, user_agent = request_origin(request)
        entry = AuditLogModel(
            user_id=actor["id"],
            action=AuditAction(action).value,
            table_name=table_name,
            record_id=str(record_id) if record_id is not None else None,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        async with database.AsyncSessionLocal() as session:
            session.add(entry)
            await session.commit()
    except Exception as e:
        logger.error(
            "Audit logging failed",
            error=str(e),
            error_type=type(e).__name__,
            action=str(action),
            table_name=table_name,
        )


async def list_audit_logs(
    db: AsyncSession, user_id: UUID, limit: int = 10
) -> list[AuditLogModel]:
    """Most recent audit entries for a user, newest first."""
    query = (
        select(AuditLogModel)
        .where(AuditLogModel.user_id == user_id)
        .order_by(AuditLogModel.timestamp.desc())
        .limit(limit)
    )
    return list((await db.execute(query)).scalars().all())
