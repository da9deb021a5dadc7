import uuid
from enum import Enum

from sqlalchemy import Column, DateTime, String, Uuid

from app.database import Base
from app.models.profile_model import utcnow


class AuditAction(str, Enum):
    VIEW = "view"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class AuditLogModel(Base):
    """Append-only record of a data access event"""

    __tablename__ = "audit_logs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, nullable=False, index=True)
    action = Column(String(10), nullable=False)
    table_name = Column(String(50), nullable=False)
    record_id = Column(String(64), nullable=True)
    ip_address = Column(String(255), nullable=False, default="unknown")
    user_agent = Column(String(512), nullable=False, default="unknown")
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utcnow)
