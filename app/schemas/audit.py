from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AuditLogResponse(BaseModel):
    id: UUID
    user_id: UUID
    action: str
    table_name: str
    record_id: Optional[str] = None
    ip_address: str
    user_agent: str
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)


class AuditLogListResponse(BaseModel):
    audit_logs: list[AuditLogResponse]
