import uuid
from enum import Enum

from sqlalchemy import Column, Date, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from app.database import Base
from app.models.profile_model import utcnow


class RecommendationType(str, Enum):
    DAILY_PLAN = "daily_plan"
    EXERCISE = "exercise"
    STRATEGY = "strategy"
    INTERVENTION = "intervention"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RecommendationStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    SKIPPED = "skipped"


class RecommendationModel(Base):
    """AI generated recommendation for a child"""

    __tablename__ = "ai_recommendations"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    child_id = Column(
        Uuid, ForeignKey("children.id", ondelete="CASCADE"), nullable=False, index=True
    )
    parent_id = Column(Uuid, nullable=False, index=True)
    recommendation_date = Column(Date, nullable=False)
    recommendation_type = Column(String(20), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    rationale = Column(Text, nullable=False)
    priority = Column(String(10), nullable=False)
    status = Column(
        String(20), nullable=False, default=RecommendationStatus.PENDING.value
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=utcnow)

    child = relationship("ChildModel", back_populates="recommendations")
