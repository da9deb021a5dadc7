import uuid
from enum import Enum

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from app.database import Base
from app.models.profile_model import utcnow


class ActivityType(str, Enum):
    THERAPY = "therapy"
    EXERCISE = "exercise"
    LEARNING = "learning"
    ROUTINE = "routine"
    SENSORY = "sensory"


class CompletionStatus(str, Enum):
    COMPLETED = "completed"
    PARTIAL = "partial"
    SKIPPED = "skipped"


class ActivityModel(Base):
    """Therapy or daily activity performed with a child"""

    __tablename__ = "activities"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    child_id = Column(
        Uuid, ForeignKey("children.id", ondelete="CASCADE"), nullable=False, index=True
    )
    parent_id = Column(Uuid, nullable=False, index=True)
    activity_date = Column(Date, nullable=False)
    activity_type = Column(String(20), nullable=False)
    activity_name = Column(String(255), nullable=False)
    duration_minutes = Column(Integer, nullable=True)
    difficulty_level = Column(Integer, nullable=False, default=3)
    child_engagement = Column(Integer, nullable=False, default=3)
    completion_status = Column(String(20), nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    child = relationship("ChildModel", back_populates="activities")
