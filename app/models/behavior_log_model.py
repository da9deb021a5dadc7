import uuid
from enum import Enum

from sqlalchemy import (
    JSON,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import relationship

from app.database import Base
from app.models.profile_model import utcnow


class Mood(str, Enum):
    HAPPY = "happy"
    CALM = "calm"
    NEUTRAL = "neutral"
    FRUSTRATED = "frustrated"
    ANXIOUS = "anxious"
    OVERWHELMED = "overwhelmed"


class BehaviorLogModel(Base):
    """Daily behavior observation for a child"""

    __tablename__ = "behavior_logs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    child_id = Column(
        Uuid, ForeignKey("children.id", ondelete="CASCADE"), nullable=False, index=True
    )
    parent_id = Column(Uuid, nullable=False, index=True)
    log_date = Column(Date, nullable=False)
    mood = Column(String(20), nullable=True)
    energy_level = Column(Integer, nullable=False, default=3)
    sleep_quality = Column(Integer, nullable=False, default=3)
    sleep_hours = Column(Float, nullable=True)
    behaviors_observed = Column(JSON, nullable=False, default=list)
    triggers = Column(Text, nullable=True)
    successes = Column(Text, nullable=True)
    challenges = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    child = relationship("ChildModel", back_populates="behavior_logs")
