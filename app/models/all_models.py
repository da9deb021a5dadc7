"""Import every model so Base.metadata knows all tables."""

from app.models.activity_model import ActivityModel
from app.models.audit_log_model import AuditLogModel
from app.models.behavior_log_model import BehaviorLogModel
from app.models.child_model import ChildModel
from app.models.profile_model import ProfileModel
from app.models.recommendation_model import RecommendationModel

__all__ = [
    "ActivityModel",
    "AuditLogModel",
    "BehaviorLogModel",
    "ChildModel",
    "ProfileModel",
    "RecommendationModel",
]
