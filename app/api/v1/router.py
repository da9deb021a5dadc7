from fastapi import APIRouter

from app.api.v1.endpoints import (
    activities,
    analysis,
    audit_logs,
    behavior_logs,
    children,
    dashboard,
    data_export,
    health,
    profile,
    progress,
    recommendations,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["Health"])
api_router.include_router(profile.router, prefix="/profile", tags=["Profile"])
api_router.include_router(children.router, prefix="/children", tags=["Children"])
api_router.include_router(
    behavior_logs.router, prefix="/behavior-logs", tags=["Behavior Logs"]
)
api_router.include_router(activities.router, prefix="/activities", tags=["Activities"])
api_router.include_router(
    recommendations.router, prefix="/recommendations", tags=["Recommendations"]
)
api_router.include_router(analysis.router, prefix="/ai", tags=["AI Analysis"])
api_router.include_router(data_export.router, prefix="/data-export", tags=["Export"])
api_router.include_router(progress.router, prefix="/progress", tags=["Progress"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
api_router.include_router(audit_logs.router, prefix="/audit-logs", tags=["Audit"])
