import uuid

from sqlalchemy import Column, Date, DateTime, String, Text, Uuid
from sqlalchemy.orm import relationship

from app.database import Base
from app.models.profile_model import utcnow


class ChildModel(Base):
    """Child profile owned by a single parent"""

    __tablename__ = "children"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    parent_id = Column(Uuid, nullable=False, index=True)
    first_name = Column(String(100), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    diagnosis = Column(String(255), nullable=True)
    diagnosis_date = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=utcnow)

    # Relationships
    behavior_logs = relationship(
        "BehaviorLogModel", back_populates="child", cascade="all, delete-orphan"
    )
    activities = relationship(
        "ActivityModel", back_populates="child", cascade="all, delete-orphan"
    )
    recommendations = relationship(
        "RecommendationModel", back_populates="child", cascade="all, delete-orphan"
    )
