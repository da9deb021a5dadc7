import structlog
from fastapi import APIRouter
from sqlalchemy.sql import text

from app import database
from app.schemas.health_schema import HealthCheck

logger = structlog.get_logger()

router = APIRouter()


@router.get("", response_model=HealthCheck)
async def health_check() -> HealthCheck:
    """
    Health check endpoint that also verifies database connectivity.

    Uses its own session so an unreachable database is reported rather
    than raised.
    """
    try:
        async with database.AsyncSessionLocal() as session:
            result = await session.execute(text("SELECT 1"))
            result.scalar()
        db_status = "healthy"
    except Exception as e:
        logger.error("Database connection failed", error=str(e))
        db_status = "unhealthy"

    return HealthCheck(
        status="healthy",
        database_status=db_status,
    )
